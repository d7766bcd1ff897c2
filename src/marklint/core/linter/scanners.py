"""Stateless text scanners shared by the engine and the rules."""
import os
import re
from typing import Iterator, Optional

NEW_LINE_RE = re.compile(r"\r\n?|\n")

# YAML (---) or TOML (+++ ... +++/...) block at the very start of a document
DEFAULT_FRONT_MATTER_RE = re.compile(
    r"((^---\s*$[\s\S]*?^---\s*$)|(^\+\+\+\s*$[\s\S]*?^(\+\+\+|\.\.\.)\s*$))"
    r"(\r\n|\r|\n|$)",
    re.MULTILINE
)

INLINE_COMMENT_RE = re.compile(
    r"<!--\s*(?:markdownlint|marklint)-"
    r"(?:(?:(disable|enable|capture|restore|disable-file|enable-file|"
    r"disable-next-line)((?:\s+[a-z0-9_-]+)*))|"
    r"(?:(configure-file)\s+([\s\S]*?)))\s*-->",
    re.IGNORECASE
)

HTML_COMMENT_BEGIN = "<!--"
HTML_COMMENT_END = "-->"

_COMPLETE_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)


def split_lines(text: str) -> list[str]:
    """Split text on any of the three line-ending styles."""
    return NEW_LINE_RE.split(text)


def preferred_line_ending(text: str) -> str:
    """
    Return the dominant line ending of text.

    Ties prefer "\\n", then "\\r\\n", then "\\r". Text without any line
    ending gets the platform default.
    """
    cr = lf = crlf = 0
    for ending in NEW_LINE_RE.findall(text):
        if ending == "\r":
            cr += 1
        elif ending == "\n":
            lf += 1
        else:
            crlf += 1

    if not (cr or lf or crlf):
        return os.linesep
    if lf >= crlf and lf >= cr:
        return "\n"
    if crlf >= cr:
        return "\r\n"
    return "\r"


def is_blank_line(line: Optional[str]) -> bool:
    """
    Check whether a line carries no content.

    Empty, whitespace-only, and lines made only of block quote markers
    and complete HTML comments all count as blank.
    """
    if not line or not line.strip():
        return True
    return not _COMPLETE_COMMENT_RE.sub("", line).replace(">", "").strip()


def clear_html_comment_text(text: str) -> str:
    """
    Blank the interior of HTML comments without changing text length.

    Every interior character becomes a space, except the one right before
    a line break which becomes a backslash so the line stays non-empty.
    Malformed or unterminated comments and inline directives are kept
    verbatim.
    """
    i = 0
    while (i := text.find(HTML_COMMENT_BEGIN, i)) != -1:
        j = text.find(HTML_COMMENT_END, i)
        if j == -1:
            # Unterminated comments are treated as text
            break

        comment = text[i + len(HTML_COMMENT_BEGIN):j]
        if (
            comment
            and not comment.startswith(">")
            and not comment.endswith("-")
            and "--" not in comment
            and not INLINE_COMMENT_RE.search(text[i:j + len(HTML_COMMENT_END)])
        ):
            blanks = re.sub(r"[^\r\n]", " ", comment)
            blanks = re.sub(r" ([\r\n])", r"\\\1", blanks)
            text = text[:i + len(HTML_COMMENT_BEGIN)] + blanks + text[j:]

        i = j + len(HTML_COMMENT_END)

    return text


def inline_code_spans(text: str) -> Iterator[tuple[str, int, int, int]]:
    """
    Find backtick code spans in text.

    Yields (content, line, column, ticks) with 0-based line and column
    offsets of the content (just past the opening ticks). A span closes
    at the next run of exactly the same number of ticks; spans may cross
    line breaks, in which case content keeps the separators. Backticks in
    a link destination and backslash-escaped backticks outside a span are
    ignored.
    """
    length = len(text)
    current_line = 0
    current_column = 0
    index = 0

    while index < length:
        start_index = -1
        start_line = -1
        start_column = -1
        tick_count = 0
        current_ticks = 0
        state = "normal"

        # Run one past the end so the end of input closes a trailing span
        while index <= length:
            char = text[index] if index < length else ""

            if char == "[" and state == "normal":
                state = "link_text_open"
            elif char == "]" and state == "link_text_open":
                state = "link_text_closed"
            elif char == "(" and state == "link_text_closed":
                state = "link_destination_open"
            elif (
                (char in ("(", ")") and state == "link_destination_open")
                or state == "link_text_closed"
            ):
                state = "normal"

            if char == "`" and state != "link_destination_open":
                current_ticks += 1
                if start_index == -1 or start_column == -1:
                    start_index = index + 1
            else:
                if start_index >= 0 and start_column >= 0 and tick_count == current_ticks:
                    yield (
                        text[start_index:index - current_ticks],
                        start_line,
                        start_column,
                        tick_count,
                    )
                    start_index = -1
                    start_column = -1
                elif start_index >= 0 and start_column == -1:
                    # End of the opening run
                    tick_count = current_ticks
                    start_line = current_line
                    start_column = current_column
                current_ticks = 0

            if char == "\n":
                current_line += 1
                current_column = 0
            elif (
                char == "\\"
                and (start_index == -1 or start_column == -1)
                and text[index + 1:index + 2] != "\n"
            ):
                # Escaped character outside a span
                index += 1
                current_column += 2
            else:
                current_column += 1
            index += 1

        if start_index >= 0:
            # Unmatched opening run; rescan from just after it
            index = start_index
            current_line = start_line
            current_column = start_column
