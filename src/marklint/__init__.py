"""Rule-based markdown linter with automatic fixes."""
__version__ = "0.1.0"
