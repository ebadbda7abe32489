"""Exceptions raised by the renderer coordinator."""


class SpindleError(Exception):
    """Base class for Spindle errors."""


class DisposedError(SpindleError):
    """Raised when a disposed RendererManager is asked to register a renderable."""

    def __init__(self, message: str = "RendererManager disposed"):
        super().__init__(message)


class NoEventLoopError(SpindleError, RuntimeError):
    """Raised when a renderable is registered outside a running asyncio event loop."""

    def __init__(self, message: str = "RendererManager needs a running asyncio event loop"):
        super().__init__(message)
