"""
Color transforms and final-state formatting.

`get_color(name)` maps a color name to a function that wraps text in the ANSI
codes for that color. The codes are rendered by Rich for the color system the
shared console detected, so on a terminal without color support (a pipe, a
file, `NO_COLOR=1`) the transforms return the text unchanged.

Final states (completed / failed / warning / info) each have an icon and a
pair of colors, kept in STATE_CONFIG. `get_state_formatters()` turns an entry
into a ready-to-print colored icon plus a transform for the message text.
"""

from collections.abc import Callable
from typing import Literal, NamedTuple, TypedDict

from rich.console import COLOR_SYSTEMS
from rich.style import Style

from .config import SPINNER_COLOR
from .console import console

ColorFn = Callable[[str], str]
FinalState = Literal["completed", "failed", "warning", "info"]

# Color names accepted by get_color(), mapped to their Rich color names.
# "gray"/"grey" are the bright black of the 16-color palette.
VALID_COLORS: dict[str, str] = {
    "black": "black",
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "blue": "blue",
    "magenta": "magenta",
    "cyan": "cyan",
    "white": "white",
    "gray": "bright_black",
    "grey": "bright_black",
    "bright_red": "bright_red",
    "bright_green": "bright_green",
    "bright_yellow": "bright_yellow",
    "bright_blue": "bright_blue",
    "bright_magenta": "bright_magenta",
    "bright_cyan": "bright_cyan",
    "bright_white": "bright_white",
}

DEFAULT_COLOR = SPINNER_COLOR if SPINNER_COLOR in VALID_COLORS else "cyan"


class StateConfig(TypedDict):
    """Icon and colors used to print a final state line."""

    icon: str
    icon_color: str
    text_color: str


class StateFormatters(NamedTuple):
    icon: str
    text: ColorFn


STATE_CONFIG: dict[str, StateConfig] = {
    "completed": {"icon": "✔", "icon_color": "green", "text_color": "white"},
    "failed": {"icon": "✖", "icon_color": "red", "text_color": "red"},
    "warning": {"icon": "⚠", "icon_color": "yellow", "text_color": "yellow"},
    "info": {"icon": "ℹ", "icon_color": "blue", "text_color": "blue"},
    "default": {"icon": "○", "icon_color": "gray", "text_color": "white"},
}


def _color_fn(name: str) -> ColorFn:
    style = Style(color=VALID_COLORS[name])

    def apply(text: str) -> str:
        system = console.color_system
        if system is None:
            return text
        return style.render(text, color_system=COLOR_SYSTEMS[system])

    return apply


def get_color(name: str) -> ColorFn:
    """Return the text transform for a color name, or for DEFAULT_COLOR if unknown."""
    return _color_fn(name if name in VALID_COLORS else DEFAULT_COLOR)


def get_state_formatters(state: str) -> StateFormatters:
    """Return the colored icon and text transform for a final state."""
    config = STATE_CONFIG.get(state, STATE_CONFIG["default"])
    icon_fn = _color_fn(config["icon_color"])
    return StateFormatters(icon=icon_fn(config["icon"]), text=_color_fn(config["text_color"]))


def format_final_line(state: str, text: str) -> str:
    """Build the `<icon> <text>` line printed when a spinner reaches a final state."""
    icon, color_text = get_state_formatters(state)
    return f"{icon} {color_text(text)}"
