"""Data models for the linter."""
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator, Mapping, Optional

from . import scanners

# A rule yields (or returns) diagnostics as plain mappings
RuleFunction = Callable[["RuleParams"], Optional[Iterable[Mapping[str, Any]]]]


@dataclass(frozen=True)
class Rule:
    """A named, independent check over a document."""
    names: tuple[str, ...]
    description: str
    tags: tuple[str, ...]
    function: RuleFunction
    information: Optional[str] = None
    deprecated: bool = False
    # Dataclass describing the rule's options, if it takes any
    options: Optional[type] = None

    @property
    def name(self) -> str:
        return self.names[0]

    @property
    def alias(self) -> str:
        return self.names[1] if len(self.names) > 1 else self.names[0]

    @property
    def key(self) -> str:
        """Case-folded canonical name used for internal lookups."""
        return self.names[0].lower()


@dataclass(frozen=True)
class FixInfo:
    """An edit to one line that resolves a diagnostic."""
    line_number: Optional[int] = None
    edit_column: Optional[int] = None
    delete_count: Optional[int] = None
    insert_text: Optional[str] = None

    def normalized(self, line_number: int) -> "FixInfo":
        """Fill in defaults; line_number is the owning diagnostic's line."""
        return FixInfo(
            line_number=self.line_number or line_number,
            edit_column=self.edit_column or 1,
            delete_count=self.delete_count or 0,
            insert_text=self.insert_text or "",
        )

    def to_dict(self) -> dict:
        """Only the properties that were actually given."""
        data = {
            "lineNumber": self.line_number,
            "editColumn": self.edit_column,
            "deleteCount": self.delete_count,
            "insertText": self.insert_text,
        }
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FixInfo":
        return cls(
            line_number=data.get("lineNumber"),
            edit_column=data.get("editColumn"),
            delete_count=data.get("deleteCount"),
            insert_text=data.get("insertText"),
        )


@dataclass(frozen=True)
class Diagnostic:
    """A validated finding, attributed to the rule that reported it."""
    rule: Rule
    line_number: int
    detail: Optional[str] = None
    context: Optional[str] = None
    range: Optional[tuple[int, int]] = None
    fix_info: Optional[FixInfo] = None


@dataclass(frozen=True)
class RuleParams:
    """
    Read-only view of one document handed to a rule.

    Line numbers are 1-based and count content lines only; front matter
    is removed before rules run and the engine shifts reported lines back.
    """
    name: str
    lines: tuple[str, ...]
    tokens: tuple[Any, ...] = ()
    front_matter_lines: tuple[str, ...] = ()
    code_lines: frozenset[int] = field(default_factory=frozenset)
    options: Any = None

    def in_code(self, line_number: int) -> bool:
        return line_number in self.code_lines

    def is_blank_line(self, line_number: int) -> bool:
        return scanners.is_blank_line(self.lines[line_number - 1])

    def inline_code_spans(
        self, first_line: int = 1, last_line: Optional[int] = None
    ) -> Iterator[tuple[str, int, int, int]]:
        """
        Code spans within a range of lines.

        Yields (content, line_number, column, ticks) with 1-based line and
        column, where column points at the first opening backtick.
        """
        last_line = last_line or len(self.lines)
        text = "\n".join(self.lines[first_line - 1:last_line])
        for content, line, column, ticks in scanners.inline_code_spans(text):
            yield content, first_line + line, column + 1 - ticks, ticks
