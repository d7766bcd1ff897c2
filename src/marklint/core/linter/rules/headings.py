"""Heading rules."""
import re
from dataclasses import dataclass
from typing import Generator

from ..models import RuleParams

ATX_MISSING_SPACE_RE = re.compile(r"^(#+)[^#\s]")
ATX_MULTIPLE_SPACE_RE = re.compile(r"^(#+)([ \t]{2,})\S")
CLOSED_ATX_RE = re.compile(r"#\s*$")


@dataclass(frozen=True)
class HeadingLevelOptions:
    level: int = 1


@dataclass(frozen=True)
class FirstLineHeadingOptions:
    level: int = 1
    # Empty string turns front matter title detection off
    front_matter_title: str = r'^\s*"?title"?\s*[:=]'


def _heading_level(token) -> int:
    return int(token.tag[1:])


def _is_atx(token) -> bool:
    return token.type == "heading_open" and token.markup.startswith("#")


def first_heading_h1(params: RuleParams) -> Generator[dict, None, None]:
    """First heading should be a top level heading."""
    level = params.options.level
    for token in params.tokens:
        if token.type == "heading_open":
            actual = _heading_level(token)
            if actual != level:
                yield {
                    "lineNumber": token.map[0] + 1,
                    "detail": f"Expected: h{level}; Actual: h{actual}",
                }
            return


def no_missing_space_atx(params: RuleParams) -> Generator[dict, None, None]:
    """No space after hash on atx style heading."""
    for line_number, line in enumerate(params.lines, 1):
        if params.in_code(line_number):
            continue
        match = ATX_MISSING_SPACE_RE.match(line)
        if match and not CLOSED_ATX_RE.search(line):
            hashes = len(match.group(1))
            yield {
                "lineNumber": line_number,
                "context": line,
                "range": [1, hashes + 1],
                "fixInfo": {"editColumn": hashes + 1, "insertText": " "},
            }


def no_multiple_space_atx(params: RuleParams) -> Generator[dict, None, None]:
    """Multiple spaces after hash on atx style heading."""
    for token in params.tokens:
        if not _is_atx(token):
            continue
        line_number = token.map[0] + 1
        line = params.lines[line_number - 1]
        match = ATX_MULTIPLE_SPACE_RE.match(line)
        if match and not CLOSED_ATX_RE.search(line):
            hashes = len(match.group(1))
            spaces = len(match.group(2))
            yield {
                "lineNumber": line_number,
                "context": line,
                "range": [1, hashes + spaces + 1],
                "fixInfo": {"editColumn": hashes + 2, "deleteCount": spaces - 1},
            }


def _front_matter_has_title(params: RuleParams, pattern: str) -> bool:
    if not pattern:
        return False
    title_re = re.compile(pattern, re.IGNORECASE)
    return any(title_re.search(line) for line in params.front_matter_lines)


def first_line_heading(params: RuleParams) -> Generator[dict, None, None]:
    """First line in file should be a top level heading."""
    options = params.options
    if _front_matter_has_title(params, options.front_matter_title):
        return

    tag = f"h{options.level}"
    for token in params.tokens:
        # Comments and other raw HTML may precede the heading
        if token.type == "html_block":
            continue
        if token.nesting < 0 or not token.map:
            continue
        if token.type != "heading_open" or token.tag != tag:
            line_number = token.map[0] + 1
            yield {
                "lineNumber": line_number,
                "context": params.lines[line_number - 1],
            }
        return
