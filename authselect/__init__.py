"""Feature-driven configuration templates, expression evaluation and file helpers."""

__version__ = "1.0.0"