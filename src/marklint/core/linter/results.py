"""Shape validated diagnostics into versioned results."""
from typing import Any, Iterable, Optional

from .models import Diagnostic, Rule

RESULT_VERSIONS = (0, 1, 2, 3)
DEFAULT_RESULT_VERSION = 2


def _check_version(version: int) -> None:
    if version not in RESULT_VERSIONS:
        raise ValueError(f"Unsupported result version: {version}")


def _first_per_line(diagnostics: Iterable[Diagnostic]) -> list[Diagnostic]:
    seen: set[tuple[str, int]] = set()
    kept = []
    for diagnostic in diagnostics:
        key = (diagnostic.rule.key, diagnostic.line_number)
        if key not in seen:
            seen.add(key)
            kept.append(diagnostic)
    return kept


def _to_dict(diagnostic: Diagnostic, version: int) -> dict:
    rule = diagnostic.rule
    data: dict[str, Any] = {"lineNumber": diagnostic.line_number}
    if version == 1:
        data["ruleName"] = rule.name
        data["ruleAlias"] = rule.alias
    else:
        data["ruleNames"] = list(rule.names)
    data.update({
        "ruleDescription": rule.description,
        "ruleInformation": rule.information,
        "errorDetail": diagnostic.detail,
        "errorContext": diagnostic.context,
        "errorRange": list(diagnostic.range) if diagnostic.range else None,
    })
    if version == 3 and diagnostic.fix_info is not None:
        data["fixInfo"] = diagnostic.fix_info.to_dict()
    return data


def format_results(
    diagnostics: Iterable[Diagnostic],
    version: int = DEFAULT_RESULT_VERSION,
    rules: Optional[Iterable[Rule]] = None
) -> Any:
    """
    Shape one input's diagnostics into the given result version.

    Diagnostics are stable-sorted by line number. Versions 0 to 2 report a
    rule at most once per line.

    Args:
        diagnostics: Validated, filtered diagnostics of one input
        version: 0 (rule name to lines), 1, 2 or 3 (lists of dicts)
        rules: Registration order for version 0 keys

    Returns:
        A dict for version 0, otherwise a list of dicts
    """
    _check_version(version)
    ordered = sorted(diagnostics, key=lambda d: d.line_number)
    if version < 3:
        ordered = _first_per_line(ordered)

    if version == 0:
        lines_by_rule: dict[str, list[int]] = {}
        for diagnostic in ordered:
            lines_by_rule.setdefault(diagnostic.rule.name, []).append(diagnostic.line_number)
        order = [rule.name for rule in rules] if rules is not None else []
        names = [n for n in order if n in lines_by_rule]
        names += [n for n in lines_by_rule if n not in names]
        return {name: sorted(set(lines_by_rule[name])) for name in names}

    return [_to_dict(diagnostic, version) for diagnostic in ordered]


class LintResults(dict):
    """Results of one run, keyed by input identifier."""

    def __init__(self, version: int = DEFAULT_RESULT_VERSION, rules: Iterable[Rule] = ()):
        super().__init__()
        _check_version(version)
        self.version = version
        self._rules = {rule.name: rule for rule in rules}

    def to_string(self, use_alias: bool = False) -> str:
        """
        Render one line per diagnostic.

        Each line reads "<id>: <line>: <names> <description>" followed by
        the detail and context when present. use_alias shows a rule's
        second name in version 0 output.
        """
        output = []
        for identifier, result in self.items():
            if self.version == 0:
                for name, line_numbers in result.items():
                    rule = self._rules.get(name)
                    if rule is None:
                        continue
                    moniker = rule.names[min(1 if use_alias else 0, len(rule.names) - 1)]
                    for line_number in line_numbers:
                        output.append(f"{identifier}: {line_number}: {moniker} {rule.description}")
                continue

            for item in result:
                if "ruleNames" in item:
                    moniker = "/".join(item["ruleNames"])
                else:
                    moniker = f"{item['ruleName']}/{item['ruleAlias']}"
                text = f"{identifier}: {item['lineNumber']}: {moniker} {item['ruleDescription']}"
                if item["errorDetail"]:
                    text += f" [{item['errorDetail']}]"
                if item["errorContext"]:
                    text += f' [Context: "{item["errorContext"]}"]'
                output.append(text)

        return "\n".join(output)

    def __str__(self) -> str:
        return self.to_string()

    def count(self) -> int:
        """Total number of reported diagnostics (or lines, for version 0)."""
        if self.version == 0:
            return sum(len(lines) for result in self.values() for lines in result.values())
        return sum(len(result) for result in self.values())
