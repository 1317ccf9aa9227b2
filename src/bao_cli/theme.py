"""Console theme for Bao.

Styles are named so output code never hard-codes colours; ``no_color``
in the configuration turns every style off.
"""

from typing import IO, Optional

from rich.console import Console
from rich.theme import Theme


CITY_LIGHTS_COLORS = {
    'surface_light': '#41505E',
    'primary': '#68D5F3',
    'accent': '#B7C5D3',
    'success': '#8BD649',
    'warning': '#FFD93D',
    'error': '#F78C6C',
    'text_primary': '#B7C5D3',
    'text_muted': '#4F5B66',
    'text_bright': '#FFFFFF',
}

BAO_THEME = Theme({
    'default': f"{CITY_LIGHTS_COLORS['text_primary']}",
    'muted': f"{CITY_LIGHTS_COLORS['text_muted']}",
    'bright': f"{CITY_LIGHTS_COLORS['text_bright']} bold",
    'success': f"{CITY_LIGHTS_COLORS['success']} bold",
    'warning': f"{CITY_LIGHTS_COLORS['warning']} bold",
    'error': f"{CITY_LIGHTS_COLORS['error']} bold",
    'primary': f"{CITY_LIGHTS_COLORS['primary']} bold",
    'accent': f"{CITY_LIGHTS_COLORS['accent']}",
    'prompt': f"{CITY_LIGHTS_COLORS['primary']}",
    'border': f"{CITY_LIGHTS_COLORS['surface_light']}",
})


def get_themed_console(no_color: bool = False, file: Optional[IO[str]] = None) -> Console:
    """Get a console instance with the Bao theme applied."""
    return Console(theme=BAO_THEME, no_color=no_color, file=file, highlight=False)
