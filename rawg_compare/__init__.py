"""Command-line client for looking up and comparing games on RAWG."""

__version__ = "0.1.0"
