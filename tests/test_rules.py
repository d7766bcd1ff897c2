"""Tests for the built-in rules."""
import pytest

from marklint.core.linter.engine import LintOptions, lint_sync
from marklint.core.linter.fixes import apply_fixes


def _lint(text: str, rule: str, options=True) -> list[dict]:
    """Run one built-in rule; returns version 3 results."""
    results = lint_sync(LintOptions(
        strings={"doc": text},
        config={"default": False, rule: options},
        result_version=3,
    ))
    return results["doc"]


def _fields(results: list[dict], *keys) -> list[tuple]:
    return [tuple(r[k] for k in keys) for r in results]


# ---------------------------------------------------------------------------
# MD002 first-heading-h1
# ---------------------------------------------------------------------------


def test_md002_off_by_default():
    results = lint_sync(LintOptions(strings={"doc": "## Heading\n"}, result_version=0))
    assert "MD002" not in results["doc"]


def test_md002_reports_first_heading_level():
    results = _lint("Text\n\n## Heading\n\n# Other\n", "MD002")
    assert _fields(results, "lineNumber", "errorDetail") == [(3, "Expected: h1; Actual: h2")]


def test_md002_level_option():
    assert _lint("## Heading\n", "MD002", {"level": 2}) == []
    assert _lint("# Heading\n", "MD002") == []


# ---------------------------------------------------------------------------
# MD008 ol-indent
# ---------------------------------------------------------------------------


def test_md008_nested_ordered_list():
    results = _lint("1. one\n   1. nested\n", "MD008")
    assert _fields(results, "lineNumber", "errorDetail", "errorRange") == [
        (2, "Expected: 2; Actual: 3", [1, 5]),
    ]
    # Two columns would end the parent item, so there is no fix
    assert "fixInfo" not in results[0]


def test_md008_nested_fix_keeps_nesting():
    text = "1. one\n    1. nested\n"
    results = _lint(text, "MD008", {"indent": 3})
    assert results[0]["fixInfo"] == {"editColumn": 1, "deleteCount": 4, "insertText": "   "}
    fixed = apply_fixes(text, results)
    assert fixed == "1. one\n   1. nested\n"
    assert _lint(fixed, "MD008", {"indent": 3}) == []


def test_md008_unfixable_nesting_is_stable():
    text = "1. a\n\n   1. b\n"
    results = _lint(text, "MD008")
    assert apply_fixes(text, results) == text
    assert _lint(text, "MD008") == results


def test_md008_ordered_inside_bullet_is_skipped():
    assert _lint("- one\n   1. nested\n", "MD008") == []


def test_md008_start_indented():
    assert _lint("  1. one\n  2. two\n", "MD008", {"start_indented": True}) == []
    results = _lint("  1. one\n", "MD008")
    assert _fields(results, "errorDetail") == [("Expected: 0; Actual: 2",)]


# ---------------------------------------------------------------------------
# MD009 no-trailing-spaces
# ---------------------------------------------------------------------------


def test_md009_trailing_spaces():
    results = _lint("a   \nb  \nc \n", "MD009")
    assert _fields(results, "lineNumber", "errorDetail", "errorRange") == [
        (1, "Expected: 0 or 2; Actual: 3", [2, 3]),
        (3, "Expected: 0 or 2; Actual: 1", [2, 1]),
    ]
    assert results[0]["fixInfo"] == {"editColumn": 2, "deleteCount": 3}


def test_md009_br_spaces_zero():
    results = _lint("b  \n", "MD009", {"br_spaces": 0})
    assert _fields(results, "errorDetail") == [("Expected: 0; Actual: 2",)]


def test_md009_skips_code():
    assert _lint("```\na   \n```\n", "MD009") == []


# ---------------------------------------------------------------------------
# MD010 no-hard-tabs
# ---------------------------------------------------------------------------


def test_md010_hard_tabs():
    results = _lint("a\tb\n", "MD010")
    assert _fields(results, "errorDetail", "errorRange", "fixInfo") == [
        ("Column: 2", [2, 1], {"editColumn": 2, "deleteCount": 1, "insertText": " "}),
    ]


def test_md010_spaces_per_tab():
    results = _lint("a\t\tb\n", "MD010", {"spaces_per_tab": 4})
    assert results[0]["fixInfo"]["insertText"] == " " * 8


def test_md010_code_blocks_option():
    text = "```\n\tx\n```\n"
    assert [r["lineNumber"] for r in _lint(text, "MD010")] == [2]
    assert _lint(text, "MD010", {"code_blocks": False}) == []


# ---------------------------------------------------------------------------
# MD012 no-multiple-blanks
# ---------------------------------------------------------------------------


def test_md012_multiple_blanks():
    results = _lint("a\n\n\n\nb\n", "MD012")
    assert _fields(results, "lineNumber", "errorDetail") == [
        (3, "Expected: 1; Actual: 2"),
        (4, "Expected: 1; Actual: 3"),
    ]
    assert results[0]["fixInfo"] == {"deleteCount": -1}
    assert apply_fixes("a\n\n\n\nb\n", results) == "a\n\nb\n"


def test_md012_maximum_option():
    assert _lint("a\n\n\nb\n", "MD012", {"maximum": 2}) == []


def test_md012_skips_code():
    assert _lint("```\n\n\n\n```\n", "MD012") == []


# ---------------------------------------------------------------------------
# MD018 / MD019 atx heading spacing
# ---------------------------------------------------------------------------


def test_md018_missing_space():
    results = _lint("#Heading 1 {MD018}\n", "MD018")
    assert _fields(results, "lineNumber", "errorContext", "errorRange", "fixInfo") == [
        (1, "#Heading 1 {MD018}", [1, 2], {"editColumn": 2, "insertText": " "}),
    ]


@pytest.mark.parametrize("text", ["# Heading\n", "#Heading#\n", "#\n", "```\n#x\n```\n"])
def test_md018_ignores(text):
    assert _lint(text, "MD018") == []


def test_md019_multiple_spaces():
    results = _lint("##  Heading 2 {MD019}\n\n##   Heading 3 {MD019}\n", "MD019")
    assert _fields(results, "lineNumber", "errorContext", "errorRange") == [
        (1, "##  Heading 2 {MD019}", [1, 5]),
        (3, "##   Heading 3 {MD019}", [1, 6]),
    ]
    assert results[1]["fixInfo"] == {"editColumn": 4, "deleteCount": 2}


def test_md019_ignores_closed_and_single_space():
    assert _lint("##  Closed ##\n\n## Fine\n", "MD019") == []


# ---------------------------------------------------------------------------
# MD038 no-space-in-code
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text,context", [
    ("Text ` code` text\n", "` code`"),
    ("Text `code ` text\n", "`code `"),
])
def test_md038_spaces_in_code(text, context):
    results = _lint(text, "MD038")
    assert _fields(results, "errorContext", "errorRange") == [(context, [6, 7])]
    assert apply_fixes(text, results) == "Text `code` text\n"


@pytest.mark.parametrize("text", [
    "Text `code` text\n",
    "Text `` `tick` `` text\n",
    "```\n` code`\n```\n",
])
def test_md038_ignores(text):
    assert _lint(text, "MD038") == []


# ---------------------------------------------------------------------------
# MD041 first-line-heading
# ---------------------------------------------------------------------------


def test_md041_first_line_not_heading():
    results = _lint("Text\n\n# Heading\n", "MD041")
    assert _fields(results, "lineNumber", "errorContext") == [(1, "Text")]


@pytest.mark.parametrize("text,options", [
    ("# Heading\n", True),
    ("<!-- comment -->\n# Heading\n", True),
    ("## Heading\n", {"level": 2}),
    ("---\ntitle: Document\n---\nText\n", True),
    ("", True),
])
def test_md041_passes(text, options):
    assert _lint(text, "MD041", options) == []


def test_md041_front_matter_title_disabled():
    results = _lint("---\ntitle: Document\n---\nText\n", "MD041", {"front_matter_title": ""})
    assert _fields(results, "lineNumber") == [(4,)]


# ---------------------------------------------------------------------------
# MD047 single-trailing-newline
# ---------------------------------------------------------------------------


def test_md047_missing_newline():
    results = _lint("# Heading\n\nText", "MD047")
    assert _fields(results, "lineNumber", "errorRange", "fixInfo") == [
        (3, [4, 1], {"editColumn": 5, "insertText": "\n"}),
    ]
    assert apply_fixes("# Heading\n\nText", results) == "# Heading\n\nText\n"


@pytest.mark.parametrize("text", ["Text\n", "", "Text\n<!-- end -->"])
def test_md047_passes(text):
    assert _lint(text, "MD047") == []
