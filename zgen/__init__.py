"""Generate code and documentation from Go struct definitions."""

__version__ = "0.1.0"