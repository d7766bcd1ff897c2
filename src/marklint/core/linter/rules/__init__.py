"""Built-in lint rules."""
from ..models import Rule
from . import code, headings, lists, whitespace

# The built-in rules follow markdownlint's rule catalogue
RULES_DOC_URL = "https://github.com/DavidAnson/markdownlint/blob/main/doc/Rules.md"


def rule_information(name: str) -> str:
    return f"{RULES_DOC_URL}#{name.lower()}"


def _builtin(names, description, tags, function, options=None, deprecated=False) -> Rule:
    return Rule(
        names=tuple(names),
        description=description,
        tags=tuple(tags),
        function=function,
        information=rule_information(names[0]),
        deprecated=deprecated,
        options=options,
    )


BUILTIN_RULES: tuple[Rule, ...] = (
    _builtin(
        ["MD002", "first-heading-h1", "first-header-h1"],
        "First heading should be a top level heading",
        ["headings", "headers"],
        headings.first_heading_h1,
        options=headings.HeadingLevelOptions,
        deprecated=True,
    ),
    _builtin(
        ["MD008", "ol-indent"],
        "Ordered list indentation",
        ["ol", "indentation"],
        lists.ol_indent,
        options=lists.OrderedIndentOptions,
    ),
    _builtin(
        ["MD009", "no-trailing-spaces"],
        "Trailing spaces",
        ["whitespace"],
        whitespace.no_trailing_spaces,
        options=whitespace.TrailingSpacesOptions,
    ),
    _builtin(
        ["MD010", "no-hard-tabs"],
        "Hard tabs",
        ["whitespace", "hard_tab"],
        whitespace.no_hard_tabs,
        options=whitespace.HardTabsOptions,
    ),
    _builtin(
        ["MD012", "no-multiple-blanks"],
        "Multiple consecutive blank lines",
        ["whitespace", "blank_lines"],
        whitespace.no_multiple_blanks,
        options=whitespace.MultipleBlanksOptions,
    ),
    _builtin(
        ["MD018", "no-missing-space-atx"],
        "No space after hash on atx style heading",
        ["headings", "headers", "atx", "spaces"],
        headings.no_missing_space_atx,
    ),
    _builtin(
        ["MD019", "no-multiple-space-atx"],
        "Multiple spaces after hash on atx style heading",
        ["headings", "headers", "atx", "spaces"],
        headings.no_multiple_space_atx,
    ),
    _builtin(
        ["MD038", "no-space-in-code"],
        "Spaces inside code span elements",
        ["whitespace", "code"],
        code.no_space_in_code,
    ),
    _builtin(
        ["MD041", "first-line-heading", "first-line-h1"],
        "First line in file should be a top level heading",
        ["headings", "headers"],
        headings.first_line_heading,
        options=headings.FirstLineHeadingOptions,
    ),
    _builtin(
        ["MD047", "single-trailing-newline"],
        "Files should end with a single newline character",
        ["blank_lines"],
        whitespace.single_trailing_newline,
    ),
)

__all__ = ["BUILTIN_RULES", "RULES_DOC_URL", "rule_information", "code", "headings", "lists", "whitespace"]
