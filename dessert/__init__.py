"""dessert - generate unit tests from a paused debugger frame."""

__version__ = "1.0.0"
