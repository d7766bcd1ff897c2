"""Resolve lint configuration into per-rule settings."""
import dataclasses
import json
import logging
import tomllib
from collections.abc import Mapping as MappingABC
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional, Sequence, Union

import yaml

from .errors import ConfigError
from .models import Rule

logger = logging.getLogger(__name__)

EXTENDS_KEY = "extends"
DEFAULT_KEY = "default"

ConfigParser = Callable[[str], Any]


@dataclass(frozen=True)
class RuleConfig:
    """Whether a rule runs, and with which options."""
    enabled: bool
    options: Any = field(default_factory=lambda: MappingProxyType({}))


class ResolvedConfig(MappingABC):
    """Read-only map of lowercase canonical rule name to RuleConfig."""

    def __init__(self, entries: Mapping[str, RuleConfig]):
        self._entries = dict(entries)

    def __getitem__(self, key: str) -> RuleConfig:
        return self._entries[key.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ResolvedConfig({self._entries!r})"


def merge_config_chain(chain: Iterable[Optional[Mapping[str, Any]]]) -> dict:
    """
    Shallow-merge configs left to right.

    Keys compare case-insensitively: a later key replaces any earlier key
    that differs only in case, and the later casing is kept.
    """
    merged: dict = {}
    keys: dict[str, Any] = {}
    for config in chain:
        for key, value in (config or {}).items():
            folded = str(key).lower()
            if folded in keys:
                del merged[keys[folded]]
            keys[folded] = key
            merged[key] = value
    if EXTENDS_KEY in keys:
        del merged[keys[EXTENDS_KEY]]
    return merged


def normalize_config(config: Optional[Mapping[str, Any]]) -> dict:
    """Lowercase every key; the last of several case variants wins."""
    return {str(key).lower(): value for key, value in (config or {}).items()}


def build_options(rule: Rule, options: Optional[Mapping[str, Any]]) -> Any:
    """
    Turn a rule's raw option mapping into the value handed to the rule.

    Rules that declare an options dataclass get an instance of it, with
    unknown keys and wrongly typed values rejected. Other rules get a
    read-only copy of the mapping.
    """
    options = dict(options or {})
    if rule.options is None:
        return MappingProxyType(options)

    known = {f.name: f for f in dataclasses.fields(rule.options)}
    for key, value in options.items():
        if key not in known:
            raise ConfigError(f"Unknown option '{key}' for rule {rule.name}")
        default = known[key].default
        if default is dataclasses.MISSING or default is None:
            continue
        if not _same_type(value, default):
            raise ConfigError(
                f"Option '{key}' for rule {rule.name} must be "
                f"{type(default).__name__}, got {type(value).__name__}"
            )
    return rule.options(**options)


def _same_type(value: Any, default: Any) -> bool:
    # bool is an int subclass; keep the two apart
    if isinstance(default, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    return isinstance(value, type(default))


def _lookup(rule: Rule, config: Mapping[str, Any]) -> tuple[bool, Any]:
    for identifier in (*rule.names, *rule.tags):
        key = identifier.lower()
        if key in config:
            return True, config[key]
    if not rule.deprecated and DEFAULT_KEY in config:
        default = config[DEFAULT_KEY]
        # Only the on/off meaning of "default" applies
        return True, isinstance(default, MappingABC) or bool(default)
    return False, None


def resolve_rule(rule: Rule, config: Optional[Mapping[str, Any]]) -> RuleConfig:
    """
    Decide whether one rule runs and with what options.

    Args:
        rule: The rule to resolve
        config: Normalized (lowercase-keyed) configuration

    Returns:
        RuleConfig for the rule
    """
    found, value = _lookup(rule, config or {})
    if not found:
        enabled = not rule.deprecated
        return RuleConfig(enabled, build_options(rule, None) if enabled else None)

    if value is None or value is False:
        return RuleConfig(False, None)
    if isinstance(value, MappingABC):
        return RuleConfig(True, build_options(rule, value))
    if value:
        return RuleConfig(True, build_options(rule, None))
    return RuleConfig(False, None)


def resolve_config(rule_set: Iterable[Rule], config: Optional[Mapping[str, Any]]) -> ResolvedConfig:
    """Resolve every rule of a rule set against one configuration."""
    normalized = normalize_config(merge_config_chain([config]))
    return ResolvedConfig({
        rule.key: resolve_rule(rule, normalized) for rule in rule_set
    })


def _parse_toml(text: str) -> Any:
    return tomllib.loads(text)


DEFAULT_PARSERS: tuple[ConfigParser, ...] = (json.loads, yaml.safe_load, _parse_toml)


def _parse(text: str, path: Path, parsers: Sequence[ConfigParser]) -> dict:
    messages = []
    for parser in parsers:
        try:
            result = parser(text)
        except Exception as e:
            messages.append(str(e))
            continue
        if result is None:
            result = {}
        if isinstance(result, MappingABC):
            return dict(result)
        messages.append(f"Expected a mapping, got {type(result).__name__}")

    raise ConfigError(f"Unable to parse '{path}'; " + "; ".join(messages))


def read_config(
    path: Union[str, Path],
    parsers: Optional[Sequence[ConfigParser]] = None
) -> dict:
    """
    Read a configuration file, following "extends" chains.

    Args:
        path: Configuration file (JSON, YAML or TOML by default)
        parsers: Decoders tried in order; the first that yields a mapping wins

    Returns:
        The merged configuration without the "extends" key

    Raises:
        ConfigError: No parser could decode a file
        OSError: A file could not be read
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    config = _parse(text, path, parsers or DEFAULT_PARSERS)

    extends = normalize_config(config).get(EXTENDS_KEY)
    if extends:
        parent_path = path.parent / Path(extends).expanduser()
        logger.debug(f"{path} extends {parent_path}")
        parent = read_config(parent_path, parsers)
        return merge_config_chain([parent, config])

    return merge_config_chain([config])
