"""Weekly training plan generator."""

__version__ = "0.1.0"
