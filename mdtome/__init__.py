"""Book configuration loading and chapter helper parsing for markdown books."""

__version__ = "0.1.0"