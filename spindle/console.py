"""
Shared Rich Console singleton for terminal output.

Every piece of Spindle that reaches the terminal goes through this one Console:
the final status lines printed by spinners, the color transforms (which ask it
which color system the terminal supports) and the render surface that redraws
the live block.

The Console is created without an explicit file, so Rich resolves `sys.stdout`
at write time. While a spinner is active `sys.stdout` is an intercepting proxy,
which means console output is buffered and replayed above the live block like
any other write.

Usage:
    from .console import console
    console.print("[green]Done[/green]")
"""

from rich.console import Console

# The shared console instance.
console = Console()
