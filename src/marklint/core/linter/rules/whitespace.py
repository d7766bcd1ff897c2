"""Whitespace and blank line rules."""
import re
from dataclasses import dataclass
from typing import Generator

from ..models import RuleParams

HARD_TAB_RE = re.compile(r"\t+")


@dataclass(frozen=True)
class TrailingSpacesOptions:
    # Spaces allowed at line end for a hard line break
    br_spaces: int = 2


@dataclass(frozen=True)
class HardTabsOptions:
    code_blocks: bool = True
    spaces_per_tab: int = 1


@dataclass(frozen=True)
class MultipleBlanksOptions:
    maximum: int = 1


def no_trailing_spaces(params: RuleParams) -> Generator[dict, None, None]:
    """
    Trailing spaces.

    A run of exactly br_spaces is left alone since it marks a line break.
    """
    br_spaces = params.options.br_spaces
    expected = 0 if br_spaces < 2 else br_spaces
    expected_text = f"{expected}" if expected == 0 else f"0 or {expected}"

    for line_number, line in enumerate(params.lines, 1):
        if params.in_code(line_number):
            continue
        trailing = len(line) - len(line.rstrip(" "))
        if trailing and trailing != expected:
            column = len(line) - trailing + 1
            yield {
                "lineNumber": line_number,
                "detail": f"Expected: {expected_text}; Actual: {trailing}",
                "range": [column, trailing],
                "fixInfo": {"editColumn": column, "deleteCount": trailing},
            }


def no_hard_tabs(params: RuleParams) -> Generator[dict, None, None]:
    """Hard tabs."""
    options = params.options
    for line_number, line in enumerate(params.lines, 1):
        if not options.code_blocks and params.in_code(line_number):
            continue
        for match in HARD_TAB_RE.finditer(line):
            column = match.start() + 1
            length = len(match.group())
            yield {
                "lineNumber": line_number,
                "detail": f"Column: {column}",
                "range": [column, length],
                "fixInfo": {
                    "editColumn": column,
                    "deleteCount": length,
                    "insertText": " " * (length * options.spaces_per_tab),
                },
            }


def no_multiple_blanks(params: RuleParams) -> Generator[dict, None, None]:
    """Multiple consecutive blank lines."""
    maximum = params.options.maximum
    count = 0
    for line_number, line in enumerate(params.lines, 1):
        if params.in_code(line_number) or line.strip():
            count = 0
            continue
        count += 1
        if count > maximum:
            yield {
                "lineNumber": line_number,
                "detail": f"Expected: {maximum}; Actual: {count}",
                "fixInfo": {"deleteCount": -1},
            }


def single_trailing_newline(params: RuleParams) -> Generator[dict, None, None]:
    """Files should end with a single newline character."""
    last_line_number = len(params.lines)
    last_line = params.lines[-1]
    if not params.is_blank_line(last_line_number):
        yield {
            "lineNumber": last_line_number,
            "range": [len(last_line), 1],
            "fixInfo": {"editColumn": len(last_line) + 1, "insertText": "\n"},
        }
