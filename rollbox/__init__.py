"""RollBox — dice notation engine and roll service."""

__version__ = "0.3.0"
