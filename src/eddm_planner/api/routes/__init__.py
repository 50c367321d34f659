"""Route group exports."""

from . import health, pricing, roi, sessions

__all__ = ["health", "pricing", "roi", "sessions"]
