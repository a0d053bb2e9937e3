"""Weather lookup proxy with a persistent lookup history."""

__version__ = "1.0.0"
