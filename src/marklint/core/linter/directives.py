"""Inline HTML-comment directives that suppress or configure rules."""
import json
import logging
from typing import Iterator

from .document import Document
from .models import Diagnostic
from .registry import RuleSet
from .rule_config import merge_config_chain
from .scanners import INLINE_COMMENT_RE

logger = logging.getLogger(__name__)

FILE_ACTIONS = ("disable-file", "enable-file")


def _directives(document: Document) -> Iterator[tuple[int, str, str]]:
    """Yield (content line number, action, parameters) outside code."""
    for line_number, line in enumerate(document.lines, 1):
        if line_number in document.code_lines or "<!--" not in line:
            continue
        for match in INLINE_COMMENT_RE.finditer(line):
            action = (match.group(1) or match.group(3)).lower()
            parameters = match.group(2) if match.group(1) else match.group(4)
            yield line_number, action, parameters or ""


def inline_config_overrides(document: Document) -> dict:
    """
    Merge the JSON of every configure-file directive in a document.

    Directives whose JSON does not decode to an object are ignored.
    """
    overrides: list[dict] = []
    for line_number, action, parameters in _directives(document):
        if action != "configure-file":
            continue
        try:
            value = json.loads(parameters)
        except json.JSONDecodeError as e:
            logger.debug(f"Ignoring configure-file on line {line_number}: {e}")
            continue
        if isinstance(value, dict):
            overrides.append(value)
    return merge_config_chain(overrides)


def _targets(rule_set: RuleSet, parameters: str) -> set[str]:
    identifiers = parameters.split()
    if not identifiers:
        return {rule.key for rule in rule_set}
    keys: set[str] = set()
    for identifier in identifiers:
        # Unknown identifiers match nothing
        keys.update(rule.key for rule in rule_set.rules_for(identifier))
    return keys


def disabled_by_line(document: Document, rule_set: RuleSet) -> list[frozenset[str]]:
    """
    Work out which rules are suppressed on each content line.

    Returns:
        One entry per content line (index 0 is line 1) holding the keys
        of the rules suppressed there
    """
    directives = list(_directives(document))

    file_disabled: set[str] = set()
    for _, action, parameters in directives:
        if action == "disable-file":
            file_disabled |= _targets(rule_set, parameters)
        elif action == "enable-file":
            file_disabled -= _targets(rule_set, parameters)

    by_line: dict[int, list[tuple[str, str]]] = {}
    for line_number, action, parameters in directives:
        by_line.setdefault(line_number, []).append((action, parameters))

    disabled = set(file_disabled)
    captured = set(disabled)
    next_line: set[str] = set()
    result: list[frozenset[str]] = []
    for line_number in range(1, len(document.lines) + 1):
        current_next: set[str] = set()
        for action, parameters in by_line.get(line_number, ()):
            if action == "disable":
                disabled |= _targets(rule_set, parameters)
            elif action == "enable":
                disabled -= _targets(rule_set, parameters)
            elif action == "capture":
                captured = set(disabled)
            elif action == "restore":
                disabled = set(captured)
            elif action == "disable-next-line":
                current_next |= _targets(rule_set, parameters)
        result.append(frozenset(disabled | next_line))
        next_line = current_next

    return result


def filter_diagnostics(
    document: Document,
    diagnostics: list[Diagnostic],
    rule_set: RuleSet,
    no_inline_config: bool = False
) -> list[Diagnostic]:
    """
    Drop diagnostics suppressed by inline directives.

    Args:
        document: The document the diagnostics belong to
        diagnostics: Diagnostics with whole-input line numbers
        rule_set: Used to resolve identifiers in directives
        no_inline_config: Ignore every directive

    Returns:
        The diagnostics that remain reported, in their original order
    """
    if no_inline_config or not diagnostics:
        return list(diagnostics)

    disabled = disabled_by_line(document, rule_set)
    if not any(disabled):
        return list(diagnostics)

    offset = len(document.front_matter_lines)
    kept = []
    for diagnostic in diagnostics:
        index = diagnostic.line_number - offset - 1
        if 0 <= index < len(disabled) and diagnostic.rule.key in disabled[index]:
            continue
        kept.append(diagnostic)
    return kept
