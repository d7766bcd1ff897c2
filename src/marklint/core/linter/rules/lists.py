"""List rules."""
import re
from dataclasses import dataclass
from typing import Generator, Iterator, Optional

from ..models import RuleParams

ORDERED_MARKER_RE = re.compile(r"^\s*0*(\d+)[.)]")

# Four or more columns past the parent's content start make an indented code block
CODE_INDENT = 4


@dataclass(frozen=True)
class OrderedIndentOptions:
    indent: int = 2
    start_indented: bool = False


def _ordered_items(tokens) -> Iterator[tuple[int, int, Optional[int]]]:
    """
    Walk list items of ordered lists nested only in ordered lists.

    Yields (line_number, nesting, parent_line_number) where nesting is 0
    for a top-level list and parent_line_number is None there. Items
    inside block quotes are left out.
    """
    lists: list[bool] = []
    items: list[int] = []
    quotes = 0
    for token in tokens:
        if token.type == "blockquote_open":
            quotes += 1
        elif token.type == "blockquote_close":
            quotes -= 1
        elif token.type in ("ordered_list_open", "bullet_list_open"):
            lists.append(token.type == "ordered_list_open")
        elif token.type in ("ordered_list_close", "bullet_list_close"):
            lists.pop()
        elif token.type == "list_item_close":
            items.pop()
        elif token.type == "list_item_open":
            line_number = token.map[0] + 1
            if not quotes and lists and all(lists):
                yield line_number, len(lists) - 1, items[-1] if items else None
            items.append(line_number)


def _content_offset(line: str, match: re.Match) -> int:
    """Column where an item's content starts, counted from 0."""
    spaces = len(line[match.end():]) - len(line[match.end():].lstrip(" "))
    return match.end() + (spaces if 1 <= spaces <= CODE_INDENT else 1)


def ol_indent(params: RuleParams) -> Generator[dict, None, None]:
    """Ordered list indentation."""
    options = params.options
    # line_number -> content offsets before and after fixing
    offsets: dict[int, tuple[int, int]] = {}
    for line_number, nesting, parent in _ordered_items(params.tokens):
        line = params.lines[line_number - 1]
        match = ORDERED_MARKER_RE.match(line)
        if not match:
            continue
        actual = len(line) - len(line.lstrip())
        expected = (nesting + (1 if options.start_indented else 0)) * options.indent

        if parent is None:
            bounds = [0]
        else:
            bounds = list(offsets.get(parent, ()))
        # Re-indenting must not move the item out of (or deeper into) its parent
        fixable = bool(bounds) and all(
            start <= expected < start + CODE_INDENT for start in bounds
        )

        offset = _content_offset(line, match)
        shift = expected - actual if fixable else 0
        offsets[line_number] = (offset, offset + shift)

        if actual != expected:
            diagnostic = {
                "lineNumber": line_number,
                "detail": f"Expected: {expected}; Actual: {actual}",
                "range": [1, len(match.group(0))],
            }
            if fixable:
                diagnostic["fixInfo"] = {
                    "editColumn": 1,
                    "deleteCount": actual,
                    "insertText": " " * expected,
                }
            yield diagnostic
