"""CLI command modules."""

from .env import env
from .generate import generate
from .project import detect, resolve

__all__ = [
    "detect",
    "env",
    "generate",
    "resolve",
]
