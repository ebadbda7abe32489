"""
Demo for `python -m spindle` and the `spindle` console script.

Runs a few spinners side by side while the program keeps logging and printing,
so the interleaving of the live block and ordinary output can be seen on a
real terminal.
"""

import asyncio
import logging

from rich.logging import RichHandler

from .console import console
from .lifecycle import install_signal_handlers
from .spinner import Spinner

logger = logging.getLogger("spindle.demo")


async def _download(name: str, steps: int, spinner: Spinner) -> None:
    for step in range(1, steps + 1):
        await asyncio.sleep(0.4)
        spinner.text = f"Downloading {name} ({step}/{steps})"
        if step == steps // 2:
            logger.info("%s is halfway there", name)


async def demo() -> None:
    first = Spinner("Resolving packages").start()
    await asyncio.sleep(1)
    first.succeed("Resolved 3 packages")

    left = Spinner("Downloading alpha", color="magenta").start()
    right = Spinner("Downloading beta", color="yellow").start()
    print("Plain print() calls land above the live block.")

    await asyncio.gather(_download("alpha", 6, left), _download("beta", 4, right))
    right.succeed("beta downloaded")
    logger.warning("alpha checksum mismatch, retrying once")
    await asyncio.sleep(0.8)
    left.fail("alpha could not be verified")

    last = Spinner("Cleaning up").start()
    await asyncio.sleep(0.5)
    last.info("Nothing to clean")


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    install_signal_handlers()
    console.print("[bold cyan]Spindle demo[/bold cyan]\n")
    asyncio.run(demo())
