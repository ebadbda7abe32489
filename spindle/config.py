import json
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .console import console

# Load environment variables from .env file
load_dotenv()

# Configuration Defaults
DEFAULT_CONFIG = {
    "SPINDLE_INTERVAL": "80",
    "SPINDLE_COLOR": "cyan",
    "SPINDLE_FRAMES": "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏",
    "SPINDLE_SIGNALS": "false",
}

# File Paths
SPINDLE_DIR = Path(os.getenv("SPINDLE_DIR", str(Path.home() / ".spindle")))
CONFIG_FILE = Path(os.getenv("SPINDLE_CONFIG_FILE", str(SPINDLE_DIR / "config.json")))


def load_config() -> dict[str, Any]:
    """Load configuration from file"""
    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE) as f:
                config: dict[str, Any] = json.load(f)
                return config
        except Exception as e:
            console.print(f"[yellow]Warning: Could not load config file: {e}[/yellow]")
    return {}


def get_setting(key: str, default: str) -> str:
    """Get setting with priority: Env Var > Config File > Default"""
    # 1. Environment Variable
    env_val = os.getenv(key)
    if env_val:
        return env_val

    # 2. Config File
    config = load_config()
    if key in config:
        return str(config[key])

    # 3. Default
    return default


def get_int_setting(key: str, default: int, minimum: int | None = None) -> int:
    """Get integer setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default))
    try:
        number = int(value)
    except ValueError:
        console.print(
            f"[yellow]Warning: Invalid integer value for {key}: {value}, using default {default}[/yellow]"
        )
        return default
    if minimum is not None and number < minimum:
        console.print(
            f"[yellow]Warning: {key} must be at least {minimum}, using default {default}[/yellow]"
        )
        return default
    return number


def get_bool_setting(key: str, default: bool) -> bool:
    """Get boolean setting with priority: Env Var > Config File > Default"""
    value = get_setting(key, str(default).lower())
    return value.lower() in ("true", "1", "yes", "on")


def get_frames_setting(key: str, default: str) -> tuple[str, ...]:
    """Get a glyph sequence setting, one glyph per character"""
    value = get_setting(key, default).strip()
    if not value:
        console.print(f"[yellow]Warning: {key} is empty, using default frames[/yellow]")
        value = default
    return tuple(value)


# Initialize Configuration
SPINNER_INTERVAL = get_int_setting("SPINDLE_INTERVAL", int(DEFAULT_CONFIG["SPINDLE_INTERVAL"]), minimum=1)
SPINNER_COLOR = get_setting("SPINDLE_COLOR", DEFAULT_CONFIG["SPINDLE_COLOR"]).strip()
SPINNER_FRAMES = get_frames_setting("SPINDLE_FRAMES", DEFAULT_CONFIG["SPINDLE_FRAMES"])
HANDLE_SIGNALS = get_bool_setting("SPINDLE_SIGNALS", False)
