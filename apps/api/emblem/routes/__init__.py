"""Route modules."""

from .art import router as art_router

__all__ = ["art_router"]
