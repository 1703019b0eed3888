"""Train travel-date availability calendar."""

__version__ = "0.1.0"
