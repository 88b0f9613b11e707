"""Load, validate and search generated documentation search indexes."""

__version__ = "0.1.0"
