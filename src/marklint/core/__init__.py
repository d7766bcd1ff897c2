"""Core modules for markdown linting."""
from .linter import LintOptions, LintResults, lint, lint_sync

__all__ = ["LintOptions", "LintResults", "lint", "lint_sync"]
