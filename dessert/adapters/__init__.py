"""
Adapters for the dessert system.

This module contains the adapter implementations that provide concrete
implementations of the port interfaces defined in the ports module.
"""

from . import debugger, io, llm

__all__ = ["debugger", "io", "llm"]
