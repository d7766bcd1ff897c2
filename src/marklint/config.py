"""Configuration management with environment variable overrides."""
from dataclasses import dataclass
from pathlib import Path
import os

from marklint import __version__
from marklint.core.linter.results import DEFAULT_RESULT_VERSION, RESULT_VERSIONS
from marklint.core.linter.rule_config import read_config

TRUE_VALUES = ("true", "1", "yes")


@dataclass
class Config:
    """Settings shared by the marklint CLI and MCP server."""

    # Lint configuration file (JSON, YAML or TOML); none means defaults
    config_path: Path | None = None

    # Output shape: 0-3
    result_version: int = DEFAULT_RESULT_VERSION

    # Turn rule faults into diagnostics instead of aborting
    handle_rule_failures: bool = False

    # Ignore <!-- markdownlint-... --> comments
    no_inline_config: bool = False

    version: str = __version__

    @classmethod
    def load(cls) -> "Config":
        """Load config with environment variable overrides."""
        config = cls()

        if val := os.environ.get("MARKLINT_CONFIG"):
            config.config_path = Path(val).expanduser()

        # Ignore versions the result builder does not know
        if val := os.environ.get("MARKLINT_RESULT_VERSION"):
            if val.isdigit() and int(val) in RESULT_VERSIONS:
                config.result_version = int(val)

        if val := os.environ.get("MARKLINT_HANDLE_RULE_FAILURES"):
            config.handle_rule_failures = val.lower() in TRUE_VALUES

        if val := os.environ.get("MARKLINT_NO_INLINE_CONFIG"):
            config.no_inline_config = val.lower() in TRUE_VALUES

        return config

    def lint_config(self, path: Path | None = None) -> dict | None:
        """Read the lint configuration from path, or the configured file."""
        path = path or self.config_path
        if path is None:
            return None
        return read_config(path)
