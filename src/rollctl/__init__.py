"""rollctl: command-line dice rolling."""

__version__ = "0.1.0"
