"""Tests for the console UI, the command loop and the CLI entry point."""

import io
from datetime import datetime

from click.testing import CliRunner

from bao_cli.app import Bao
from bao_cli.cli import main
from bao_cli.domain import Deadline, ToDo
from bao_cli.parser import CommandResult
from bao_cli.storage import Storage, StorageError
from bao_cli.theme import get_themed_console
from bao_cli.ui import ConsoleUi

from conftest import RecordingStore, RecordingUi


class ScriptedUi(RecordingUi):
    """Recording UI that feeds commands from a list, then signals EOF."""

    def __init__(self, lines):
        super().__init__()
        self.lines = list(lines)

    def read_command(self) -> str:
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class BrokenStore(RecordingStore):
    def load(self):
        raise StorageError("unreadable")


class TestConsoleUi:
    """Test rich console output."""

    def test_show_prints_text_literally(self):
        buffer = io.StringIO()
        ui = ConsoleUi(console=get_themed_console(no_color=True, file=buffer))
        ui.show("T | [bold] [X] literal")
        assert buffer.getvalue() == "T | [bold] [X] literal\n"

    def test_welcome_without_banner(self):
        buffer = io.StringIO()
        ui = ConsoleUi(console=get_themed_console(no_color=True, file=buffer), show_banner=False)
        ui.show_welcome()
        assert "Bao is here" in buffer.getvalue()


class TestBao:
    """Test the command loop."""

    def test_loads_saved_tasks(self, config):
        store = RecordingStore([ToDo("saved")])
        app = Bao(config, ui=RecordingUi(), storage=store)
        assert app.tasks.size() == 1

    def test_load_failure_starts_empty(self, config):
        ui = RecordingUi()
        app = Bao(config, ui=ui, storage=BrokenStore())
        assert app.tasks.size() == 0
        assert "unreadable" in ui.messages[0]

    def test_run_until_bye(self, config):
        ui = ScriptedUi(["todo a", "", "bye", "todo never"])
        store = RecordingStore()
        Bao(config, ui=ui, storage=store).run()
        assert ui.exit_shown
        assert store.save_count == 1
        assert ui.lines == ["todo never"]

    def test_run_stops_on_eof(self, config):
        ui = ScriptedUi(["todo a"])
        app = Bao(config, ui=ui, storage=RecordingStore())
        app.run()
        assert ui.exit_shown
        assert app.tasks.size() == 1

    def test_no_color_config_reaches_console(self, config):
        config.no_color = True
        app = Bao(config, storage=RecordingStore())
        assert isinstance(app.ui, ConsoleUi)
        assert app.ui.console.no_color is True

    def test_execute_returns_result(self, config):
        app = Bao(config, ui=RecordingUi(), storage=RecordingStore())
        assert app.execute("list") is CommandResult.CONTINUE
        assert app.execute("bye") is CommandResult.EXIT


class TestCli:
    """Test the click entry point."""

    def test_one_shot_command_persists(self, config):
        runner = CliRunner()
        result = runner.invoke(main, ["deadline", "Submit", "report", "/by", "2024-08-28", "1800"])
        assert result.exit_code == 0, result.output
        assert "D | [ ] Submit report | by: Aug 28 2024 18:00" in result.output

        saved = Storage(config).load()
        assert saved == [Deadline("Submit report", datetime(2024, 8, 28, 18, 0))]

    def test_interactive_session(self, isolated_home):
        runner = CliRunner()
        result = runner.invoke(main, [], input="todo Buy milk\nlist\nbye\n")
        assert result.exit_code == 0, result.output
        assert "1. T | [ ] Buy milk" in result.output
        assert "Bye!" in result.output

    def test_session_ends_at_end_of_input(self, isolated_home):
        runner = CliRunner()
        result = runner.invoke(main, [], input="todo a\n")
        assert result.exit_code == 0, result.output
        assert "Bye!" in result.output

    def test_data_file_option(self, tmp_path):
        target = tmp_path / "other.md"
        runner = CliRunner()
        result = runner.invoke(main, ["--data-file", str(target), "todo", "elsewhere"])
        assert result.exit_code == 0, result.output
        assert target.exists()
        assert "elsewhere" in target.read_text(encoding="utf-8")

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "bao" in result.output
