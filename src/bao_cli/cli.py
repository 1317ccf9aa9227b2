"""Command-line entry point for Bao."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .app import Bao
from .config import ConfigModel, get_config, load_config


logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(config: ConfigModel, verbose: bool = False) -> None:
    """Send logs to a file in the data directory so the console stays clean."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    for handler in list(root.handlers):
        if getattr(handler, "_bao_handler", False):
            root.removeHandler(handler)
            handler.close()

    try:
        handler = logging.FileHandler(str(config.get_log_path()), encoding="utf-8")
    except OSError as e:
        click.echo(f"Warning: cannot write log file {config.get_log_path()}: {e}", err=True)
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler._bao_handler = True
    root.addHandler(handler)
    logging.captureWarnings(True)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Task file to use instead of the configured one")
@click.option("--verbose", "-v", is_flag=True, help="Verbose logging")
@click.version_option(__version__, prog_name="bao")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def main(config_path, data_file, verbose, command):
    """Bao - track to-dos, deadlines and events from the terminal.

    Without COMMAND, starts an interactive session. With COMMAND, runs that
    single command and exits, e.g.:

      bao deadline Submit report /by 2024-08-28 1800
    """
    try:
        config = load_config(Path(config_path)) if config_path else get_config()
    except OSError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if data_file:
        config.data_file = str(Path(data_file).expanduser().resolve())
    setup_logging(config, verbose)

    if command:
        config.show_banner = False
    app = Bao(config)

    if command:
        result = app.execute(" ".join(command))
        logger.debug(f"One-shot command finished with {result.value}")
        return

    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
