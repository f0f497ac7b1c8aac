"""Base error type."""


class RenderCacheError(Exception):
    """Raised by the render cache engine."""


__all__ = ["RenderCacheError"]
