"""Run rules over a document and validate what they report."""
import copy
import logging
from typing import Any, Mapping, Optional, Sequence

from .document import Document
from .errors import InvalidDiagnostic, RuleFault
from .models import Diagnostic, FixInfo, Rule, RuleParams
from .registry import RuleSet
from .rule_config import ResolvedConfig

logger = logging.getLogger(__name__)

FAULT_DETAIL = "This rule threw an exception: {}"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _optional_text(raw: Mapping[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is not None and not isinstance(value, str):
        raise InvalidDiagnostic(key)
    return value or None


def _validate_range(raw: Mapping[str, Any], line: str) -> Optional[tuple[int, int]]:
    value = raw.get("range")
    if value is None:
        return None
    if (
        not isinstance(value, (list, tuple))
        or len(value) != 2
        or not all(_is_int(v) for v in value)
    ):
        raise InvalidDiagnostic("range")
    column, length = value
    if column < 1 or length < 1 or column > len(line) or column + length - 1 > len(line):
        raise InvalidDiagnostic("range")
    return column, length


def _validate_fix_info(raw: Mapping[str, Any], lines: Sequence[str], line_number: int) -> Optional[FixInfo]:
    value = raw.get("fixInfo")
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidDiagnostic("fixInfo")

    # A key that is present must hold a valid value; None is not "absent"
    fix_line = value.get("lineNumber")
    if "lineNumber" in value and (not _is_int(fix_line) or not 1 <= fix_line <= len(lines)):
        raise InvalidDiagnostic("fixInfo.lineNumber")
    line = lines[(fix_line or line_number) - 1]

    edit_column = value.get("editColumn")
    if "editColumn" in value and (
        not _is_int(edit_column) or not 1 <= edit_column <= len(line) + 1
    ):
        raise InvalidDiagnostic("fixInfo.editColumn")

    delete_count = value.get("deleteCount")
    if "deleteCount" in value and (
        not _is_int(delete_count)
        or not -1 <= delete_count <= len(line) - (edit_column or 1) + 1
    ):
        raise InvalidDiagnostic("fixInfo.deleteCount")

    insert_text = value.get("insertText")
    if "insertText" in value and not isinstance(insert_text, str):
        raise InvalidDiagnostic("fixInfo.insertText")

    return FixInfo(fix_line, edit_column, delete_count, insert_text)


def validate_diagnostic(rule: Rule, raw: Any, lines: Sequence[str]) -> Diagnostic:
    """
    Check one reported diagnostic against the content lines.

    Line numbers in the result are still relative to the content; the
    caller shifts them past any front matter.

    Raises:
        InvalidDiagnostic: A property is missing, mistyped or out of bounds
    """
    if not isinstance(raw, Mapping):
        raise InvalidDiagnostic("lineNumber")

    line_number = raw.get("lineNumber")
    if not _is_int(line_number) or not 1 <= line_number <= len(lines):
        raise InvalidDiagnostic("lineNumber")

    detail = _optional_text(raw, "detail")
    context = _optional_text(raw, "context")
    error_range = _validate_range(raw, lines[line_number - 1])
    fix_info = _validate_fix_info(raw, lines, line_number)

    return Diagnostic(
        rule=rule,
        line_number=line_number,
        detail=detail,
        context=context,
        range=error_range,
        fix_info=fix_info,
    )


def _shift(diagnostic: Diagnostic, offset: int) -> Diagnostic:
    if not offset:
        return diagnostic
    fix_info = diagnostic.fix_info
    if fix_info is not None and fix_info.line_number is not None:
        fix_info = FixInfo(
            fix_info.line_number + offset,
            fix_info.edit_column,
            fix_info.delete_count,
            fix_info.insert_text,
        )
    return Diagnostic(
        rule=diagnostic.rule,
        line_number=diagnostic.line_number + offset,
        detail=diagnostic.detail,
        context=diagnostic.context,
        range=diagnostic.range,
        fix_info=fix_info,
    )


def run_rule(
    rule: Rule,
    params: RuleParams,
    handle_rule_failures: bool = False
) -> list[Diagnostic]:
    """
    Run one rule and collect its validated diagnostics.

    Args:
        rule: The rule to run
        params: Read-only document view for the rule
        handle_rule_failures: Report faults as a diagnostic instead of raising

    Returns:
        Diagnostics with line numbers relative to the whole input

    Raises:
        InvalidDiagnostic: The rule reported a bad diagnostic (strict mode)
        RuleFault: The rule raised (strict mode)
    """
    offset = len(params.front_matter_lines)
    diagnostics: list[Diagnostic] = []

    try:
        for raw in rule.function(params) or ():
            # Later mutation by the rule must not change what was reported
            raw = copy.deepcopy(raw)
            diagnostics.append(_shift(validate_diagnostic(rule, raw, params.lines), offset))
    except Exception as e:
        if not handle_rule_failures:
            if isinstance(e, InvalidDiagnostic):
                raise
            raise RuleFault(rule.name, str(e)) from e

        logger.warning(f"Rule {rule.name} failed on {params.name or '<string>'}: {e}")
        diagnostics.append(Diagnostic(
            rule=rule,
            line_number=1 + offset,
            detail=FAULT_DETAIL.format(e),
        ))

    return diagnostics


def run_rules(
    document: Document,
    rule_set: RuleSet,
    config: ResolvedConfig,
    handle_rule_failures: bool = False
) -> list[Diagnostic]:
    """Run every enabled rule over a document, in registration order."""
    diagnostics: list[Diagnostic] = []
    for rule in rule_set:
        rule_config = config.get(rule.key)
        if rule_config is None or not rule_config.enabled:
            continue

        params = RuleParams(
            name=document.name,
            lines=document.lines,
            tokens=document.tokens,
            front_matter_lines=document.front_matter_lines,
            code_lines=document.code_lines,
            options=rule_config.options,
        )
        diagnostics.extend(run_rule(rule, params, handle_rule_failures))

    return diagnostics
