"""Apply fix information from diagnostics to text."""
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from . import scanners
from .models import Diagnostic, FixInfo

logger = logging.getLogger(__name__)


def _as_fix_info(fix_info: Union[FixInfo, Mapping[str, Any]]) -> FixInfo:
    if isinstance(fix_info, FixInfo):
        return fix_info
    return FixInfo.from_dict(fix_info)


def apply_fix(
    line: str,
    fix_info: Union[FixInfo, Mapping[str, Any]],
    line_ending: Optional[str] = None
) -> Optional[str]:
    """
    Apply a single fix to one line.

    Args:
        line: The line to edit, without its line ending
        fix_info: FixInfo or its dict form (editColumn/deleteCount/insertText)
        line_ending: Substituted for "\\n" in the inserted text

    Returns:
        The edited line, or None when the fix deletes the whole line
    """
    fix = _as_fix_info(fix_info).normalized(1)
    if fix.delete_count == -1:
        return None

    edit_index = fix.edit_column - 1
    insert_text = fix.insert_text.replace("\n", line_ending or "\n")
    return line[:edit_index] + insert_text + line[edit_index + fix.delete_count:]


def _collect_fixes(
    diagnostics: Iterable[Union[Diagnostic, Mapping[str, Any]]]
) -> list[FixInfo]:
    fixes = []
    for diagnostic in diagnostics:
        if isinstance(diagnostic, Diagnostic):
            line_number = diagnostic.line_number
            fix_info = diagnostic.fix_info
        else:
            line_number = diagnostic.get("lineNumber")
            fix_info = diagnostic.get("fixInfo")
        if fix_info:
            fixes.append(_as_fix_info(fix_info).normalized(line_number))
    return fixes


def _sort_key(fix: FixInfo) -> tuple:
    return (
        -fix.line_number,
        # Whole-line deletes go last within a line
        fix.delete_count == -1,
        -fix.edit_column,
        -max(fix.delete_count, len(fix.insert_text)),
        -len(fix.insert_text),
    )


def _is_pure_insert(fix: FixInfo) -> bool:
    return fix.delete_count == 0 and fix.insert_text != ""


def _is_pure_delete(fix: FixInfo) -> bool:
    return fix.delete_count > 0 and fix.insert_text == ""


def _merge(fixes: list[FixInfo]) -> list[FixInfo]:
    """Drop exact duplicates and fold insert+delete pairs at one spot."""
    merged: list[FixInfo] = []
    for fix in fixes:
        if merged:
            previous = merged[-1]
            if fix == previous:
                continue
            same_spot = (
                previous.line_number == fix.line_number
                and previous.edit_column == fix.edit_column
            )
            if same_spot:
                insert, delete = None, None
                if _is_pure_insert(previous) and _is_pure_delete(fix):
                    insert, delete = previous, fix
                elif _is_pure_delete(previous) and _is_pure_insert(fix):
                    insert, delete = fix, previous
                if insert is not None:
                    merged[-1] = FixInfo(
                        line_number=fix.line_number,
                        edit_column=fix.edit_column,
                        delete_count=delete.delete_count,
                        insert_text=insert.insert_text,
                    )
                    continue
        merged.append(fix)
    return merged


def apply_fixes(
    text: str,
    diagnostics: Iterable[Union[Diagnostic, Mapping[str, Any]]],
    line_ending: Optional[str] = None
) -> str:
    """
    Apply every fix found in diagnostics to text.

    Fixes are applied right to left and bottom to top. When two fixes on
    one line overlap, the first one applied wins and the other is skipped.

    Args:
        text: Original text
        diagnostics: Diagnostic objects or result-version-3 dicts
        line_ending: Line ending for the output (default: dominant in text)

    Returns:
        Fixed text
    """
    fixes = _collect_fixes(diagnostics)
    if not fixes:
        return text

    line_ending = line_ending or scanners.preferred_line_ending(text)
    lines: list[Optional[str]] = list(scanners.split_lines(text))
    fixes = _merge(sorted(fixes, key=_sort_key))

    applied = 0
    last_line_index = -1
    last_edit_index = -1
    for fix in fixes:
        line_index = fix.line_number - 1
        edit_index = fix.edit_column - 1
        # A delete may end where the previous edit starts; an insert may not
        limit = last_edit_index - (0 if fix.delete_count > 0 else 1)
        if (
            line_index != last_line_index
            or fix.delete_count == -1
            or edit_index + fix.delete_count <= limit
        ):
            if 0 <= line_index < len(lines) and lines[line_index] is not None:
                lines[line_index] = apply_fix(lines[line_index], fix, line_ending)
                applied += 1
        last_line_index = line_index
        last_edit_index = edit_index

    logger.debug(f"Applied {applied} of {len(fixes)} fixes")
    return line_ending.join(line for line in lines if line is not None)
