"""pumplaunch - launch pump.fun tokens from the command line."""

__version__ = "1.0.0"
