"""Inline code rules."""
import re
from typing import Generator

from .. import scanners
from ..models import RuleParams

LEFT_SPACE_RE = re.compile(r"^\s([^`]|$)")
RIGHT_SPACE_RE = re.compile(r"[^`]\s$")


def _has_code_span(token) -> bool:
    return any(child.type == "code_inline" for child in token.children or ())


def no_space_in_code(params: RuleParams) -> Generator[dict, None, None]:
    """
    Spaces inside code span elements.

    A span that crosses lines is reported on the line holding the
    offending edge.
    """
    for token in params.tokens:
        if token.type != "inline" or not token.map or not _has_code_span(token):
            continue

        first_line = token.map[0]
        token_lines = params.lines[first_line:token.map[1]]
        text = "\n".join(token_lines)
        for code, line_index, column_index, ticks in scanners.inline_code_spans(text):
            code_lines = scanners.split_lines(code)
            left = bool(LEFT_SPACE_RE.search(code))
            right = not left and bool(RIGHT_SPACE_RE.search(code))
            if not (left or right):
                continue

            range_index = column_index - ticks
            range_length = len(code) + 2 * ticks
            line_offset = 0
            fix_index = column_index
            fix_length = len(code)
            if right and len(code_lines) > 1:
                # The trailing space sits on the last line of the span
                range_index = 0
                line_offset = len(code_lines) - 1
                fix_index = 0

            edge_line = code_lines[line_offset]
            if len(code_lines) > 1:
                range_length = len(edge_line) + ticks
                fix_length = len(edge_line)

            line = token_lines[line_index + line_offset]
            trimmed = edge_line.strip()
            insert_text = (
                (" " if trimmed.startswith("`") else "")
                + trimmed
                + (" " if trimmed.endswith("`") else "")
            )
            yield {
                "lineNumber": first_line + line_index + line_offset + 1,
                "context": line[range_index:range_index + range_length],
                "range": [range_index + 1, min(range_length, len(line) - range_index)],
                "fixInfo": {
                    "editColumn": fix_index + 1,
                    "deleteCount": fix_length,
                    "insertText": insert_text,
                },
            }
