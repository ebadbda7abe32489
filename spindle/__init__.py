"""Spindle - live terminal spinners that coexist with logging and print()"""

from .buffer import LogBuffer, LogEntry
from .colors import (
    DEFAULT_COLOR,
    STATE_CONFIG,
    VALID_COLORS,
    format_final_line,
    get_color,
    get_state_formatters,
)
from .config import (
    CONFIG_FILE,
    DEFAULT_CONFIG,
    HANDLE_SIGNALS,
    SPINNER_COLOR,
    SPINNER_FRAMES,
    SPINNER_INTERVAL,
    get_bool_setting,
    get_int_setting,
    get_setting,
    load_config,
)
from .console import console
from .errors import DisposedError, NoEventLoopError, SpindleError
from .lifecycle import install_signal_handlers
from .manager import Renderable, RendererManager
from .spinner import Spinner, spinner
from .surface import RenderSurface

__all__ = [
    # Spinner
    "Spinner",
    "spinner",
    # Coordinator
    "Renderable",
    "RendererManager",
    "RenderSurface",
    "LogBuffer",
    "LogEntry",
    # Errors
    "DisposedError",
    "NoEventLoopError",
    "SpindleError",
    # Colors
    "DEFAULT_COLOR",
    "STATE_CONFIG",
    "VALID_COLORS",
    "format_final_line",
    "get_color",
    "get_state_formatters",
    # Config
    "CONFIG_FILE",
    "DEFAULT_CONFIG",
    "HANDLE_SIGNALS",
    "SPINNER_COLOR",
    "SPINNER_FRAMES",
    "SPINNER_INTERVAL",
    "get_bool_setting",
    "get_int_setting",
    "get_setting",
    "load_config",
    # Console
    "console",
    # Lifecycle
    "install_signal_handlers",
]
