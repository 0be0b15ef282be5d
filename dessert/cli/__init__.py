"""Command line interface for dessert."""

from .main import app

__all__ = ["app"]
