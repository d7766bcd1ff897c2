"""Rule registry: validates custom rules and merges them with built-ins."""
import dataclasses
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union
from urllib.parse import urlparse

from .errors import DuplicateIdentifier, MalformedRule
from .models import Rule

RuleLike = Union[Rule, Mapping[str, Any]]


class RuleSet:
    """Ordered, immutable collection of rules with identifier lookup."""

    def __init__(self, rules: Iterable[Rule]):
        self._rules = tuple(rules)
        self._by_name: dict[str, Rule] = {}
        self._by_tag: dict[str, list[Rule]] = {}
        for rule in self._rules:
            for name in rule.names:
                self._by_name[name.lower()] = rule
            for tag in rule.tags:
                self._by_tag.setdefault(tag.lower(), []).append(rule)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and identifier.lower() in self._by_name

    def get(self, identifier: str) -> Optional[Rule]:
        """Find a rule by any of its names, ignoring case."""
        return self._by_name.get(identifier.lower())

    def rules_for(self, identifier: str) -> list[Rule]:
        """Rules covered by a name, alias or tag; empty when unknown."""
        key = identifier.lower()
        if key in self._by_name:
            return [self._by_name[key]]
        return list(self._by_tag.get(key, ()))

    def __repr__(self) -> str:
        return f"RuleSet({[rule.name for rule in self._rules]!r})"


def _is_string_list(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and len(value) > 0
        and all(isinstance(item, str) and item for item in value)
    )


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _field(rule: RuleLike, name: str, default: Any = None) -> Any:
    if isinstance(rule, Rule):
        return getattr(rule, name)
    if isinstance(rule, Mapping):
        return rule.get(name, default)
    return getattr(rule, name, default)


def validate_rule(rule: RuleLike, index: int) -> Rule:
    """
    Check the shape of one custom rule and return it as a Rule.

    Raises:
        MalformedRule: A property is missing or has the wrong shape
    """
    names = _field(rule, "names")
    if not _is_string_list(names):
        raise MalformedRule("names", index)

    tags = _field(rule, "tags")
    if not _is_string_list(tags):
        raise MalformedRule("tags", index)

    description = _field(rule, "description")
    if not isinstance(description, str) or not description:
        raise MalformedRule("description", index)

    function = _field(rule, "function")
    if not callable(function):
        raise MalformedRule("function", index)

    information = _field(rule, "information")
    if information:
        if not isinstance(information, str) or not _is_http_url(information):
            raise MalformedRule("information", index)
    else:
        information = None

    if isinstance(rule, Rule):
        return dataclasses.replace(
            rule, names=tuple(names), tags=tuple(tags), information=information
        )
    return Rule(
        names=tuple(names),
        description=description,
        tags=tuple(tags),
        function=function,
        information=information,
        deprecated=bool(_field(rule, "deprecated", False)),
        options=_field(rule, "options"),
    )


def build_rule_set(
    custom_rules: Sequence[RuleLike] = (),
    builtin_rules: Optional[Sequence[Rule]] = None
) -> RuleSet:
    """
    Validate custom rules and combine them with the built-in rules.

    Args:
        custom_rules: Rule objects or mappings with the same fields
        builtin_rules: Rules registered ahead of the custom ones
            (default: the built-in set)

    Returns:
        RuleSet with built-ins first, then custom rules in order

    Raises:
        MalformedRule: A custom rule is wrongly shaped
        DuplicateIdentifier: A name or tag collides with an earlier one
    """
    if builtin_rules is None:
        from .rules import BUILTIN_RULES
        builtin_rules = BUILTIN_RULES

    names: set[str] = set()
    tags: set[str] = set()
    for rule in builtin_rules:
        names.update(name.lower() for name in rule.names)
        tags.update(tag.lower() for tag in rule.tags)

    validated: list[Rule] = []
    for index, custom in enumerate(custom_rules):
        rule = validate_rule(custom, index)
        for name in rule.names:
            key = name.lower()
            if key in names or key in tags:
                raise DuplicateIdentifier(name, "name", index)
            names.add(key)
        for tag in rule.tags:
            key = tag.lower()
            if key in names:
                raise DuplicateIdentifier(tag, "tag", index)
            tags.add(key)
        validated.append(rule)

    return RuleSet([*builtin_rules, *validated])
