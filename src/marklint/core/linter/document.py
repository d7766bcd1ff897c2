"""Document preparation: front matter, lines and tokens."""
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from markdown_it import MarkdownIt

from . import scanners

CODE_TOKEN_TYPES = ("fence", "code_block")

_md = MarkdownIt("commonmark")


def _tokenize(content: str) -> list:
    return _md.parse(content)


@dataclass(frozen=True)
class Document:
    """One input ready for linting."""
    name: str
    content: str
    lines: tuple[str, ...]
    front_matter_lines: tuple[str, ...] = ()
    tokens: tuple[Any, ...] = ()
    code_lines: frozenset[int] = field(default_factory=frozenset)
    line_ending: str = "\n"

    @classmethod
    def from_text(
        cls,
        text: Optional[str],
        name: str = "",
        front_matter: Optional[re.Pattern] = scanners.DEFAULT_FRONT_MATTER_RE,
        parser: Optional[Callable[[str], list]] = None,
    ) -> "Document":
        """
        Build a document from raw text.

        Args:
            text: Markdown source; None is treated as empty
            name: Identifier used in results
            front_matter: Pattern matched at offset 0, or None to disable
            parser: Tokenizer taking the content, defaults to markdown-it-py

        Returns:
            Document with content lines, tokens and code line numbers
        """
        text = (text or "").lstrip("﻿")

        front_matter_lines: list[str] = []
        content = text
        if front_matter is not None:
            match = front_matter.match(text)
            if match:
                matched = match.group(0)
                front_matter_lines = scanners.split_lines(matched)
                # A trailing line break leaves an empty final element
                if front_matter_lines and front_matter_lines[-1] == "":
                    front_matter_lines.pop()
                content = text[len(matched):]

        tokens = (parser or _tokenize)(content)

        return cls(
            name=name,
            content=content,
            lines=tuple(scanners.split_lines(content)),
            front_matter_lines=tuple(front_matter_lines),
            tokens=tuple(tokens),
            code_lines=frozenset(_code_lines(tokens)),
            line_ending=scanners.preferred_line_ending(text),
        )


def _code_lines(tokens) -> set[int]:
    lines: set[int] = set()
    for token in tokens:
        if getattr(token, "type", None) in CODE_TOKEN_TYPES and token.map:
            start, end = token.map
            lines.update(range(start + 1, end + 1))
    return lines
