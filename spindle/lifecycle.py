"""
Process exit handling.

A live block left on screen when the process ends (normal exit, Ctrl+C, kill)
would leave a half-drawn spinner behind and, while interception is active,
swallow whatever output is still buffered. The atexit hook registered on
import force-resets the coordinator, which replays the buffer, restores the
real streams and clears the block.

Signal handlers are opt-in, because they replace Python's default
KeyboardInterrupt behavior: call install_signal_handlers() (the demo does) or
set SPINDLE_SIGNALS=true to have the first RendererManager install them.
"""

import atexit
import signal
import sys
import threading
from types import FrameType

from .manager import RendererManager

_installed = False


def reset_on_exit() -> None:
    RendererManager.reset(force=True)


def _handle_signal(signum: int, frame: FrameType | None) -> None:
    reset_on_exit()
    # Conventional shell exit codes: 130 for SIGINT, 143 for SIGTERM.
    sys.exit(128 + signum)


def install_signal_handlers() -> bool:
    """Reset the coordinator and exit on SIGINT/SIGTERM.

    Only possible from the main thread; returns False elsewhere. Installing
    twice is a no-op.
    """
    global _installed
    if _installed:
        return True
    if threading.current_thread() is not threading.main_thread():
        return False

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)
    _installed = True
    return True


atexit.register(reset_on_exit)
