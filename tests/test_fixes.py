"""Tests for applying fixes to lines and documents."""
from itertools import permutations

import pytest

from marklint.core.linter.fixes import apply_fix, apply_fixes
from marklint.core.linter.models import FixInfo


def _diag(line_number: int = 1, **fix_info) -> dict:
    return {"lineNumber": line_number, "fixInfo": fix_info}


# ---------------------------------------------------------------------------
# apply_fix
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("fix_info,expected", [
    ({"editColumn": 12, "deleteCount": 1}, "Hello world"),
    ({"editColumn": 13, "insertText": " Hi."}, "Hello world. Hi."),
    ({"editColumn": 7, "insertText": "big "}, "Hello big world."),
    ({"deleteCount": 6}, "world."),
    ({"editColumn": 7, "deleteCount": 5, "insertText": "there"}, "Hello there."),
    ({"editColumn": 13, "insertText": "\n"}, "Hello world.\n"),
    ({"deleteCount": -1}, None),
])
def test_apply_fix(fix_info, expected):
    assert apply_fix("Hello world.", fix_info) == expected


def test_apply_fix_uses_line_ending():
    assert apply_fix("Hello world.", {"editColumn": 13, "insertText": "\n"}, "\r\n") == "Hello world.\r\n"


def test_apply_fix_accepts_fix_info():
    assert apply_fix("Hello world.", FixInfo(edit_column=1, delete_count=6)) == "world."


# ---------------------------------------------------------------------------
# apply_fixes
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("text,diagnostics,expected", [
    ("Hello world.", [_diag(editColumn=12, deleteCount=1)], "Hello world"),
    (
        "Hello world.",
        [_diag(editColumn=6, deleteCount=1), _diag(editColumn=12, deleteCount=1)],
        "Helloworld",
    ),
    ("Hello world.", [_diag(editColumn=13, insertText=" Hi.")], "Hello world. Hi."),
    ("Hello world.", [_diag(editColumn=7, insertText="big ")], "Hello big world."),
    ("Hello world.", [_diag(deleteCount=6)], "world."),
    (
        "Hello world.",
        [_diag(editColumn=7, deleteCount=5, insertText="there")],
        "Hello there.",
    ),
    ("Hello\nworld", [_diag(1, deleteCount=-1)], "world"),
    ("Hello\nworld", [_diag(2, deleteCount=-1)], "Hello"),
    ("Hello\nworld", [_diag(1, deleteCount=-1), _diag(2, deleteCount=-1)], ""),
    (
        "Hello\nworld",
        [_diag(1, deleteCount=-1), _diag(1, insertText="Big ")],
        "world",
    ),
    (
        "Hello world",
        [_diag(insertText="aa"), _diag(insertText="b")],
        "aaHello world",
    ),
    (
        "Hello world",
        [_diag(insertText="a"), _diag(insertText="bb")],
        "bbHello world",
    ),
    (
        "Hello world",
        [_diag(editColumn=6, insertText=" big"), _diag(editColumn=7, deleteCount=1)],
        "Hello big orld",
    ),
    (
        "Hello\nworld\nhello\rworld",
        [_diag(4, editColumn=6, insertText="\n")],
        "Hello\nworld\nhello\nworld\n",
    ),
    (
        "Hello\r\nworld\r\nhello\nworld",
        [_diag(4, editColumn=6, insertText="\n")],
        "Hello\r\nworld\r\nhello\r\nworld\r\n",
    ),
    (
        "Hello\rworld\rhello\nworld",
        [_diag(4, editColumn=6, insertText="\n")],
        "Hello\rworld\rhello\rworld\r",
    ),
    (
        "Hello\r\nworld",
        [_diag(2, editColumn=6, insertText="\n\n")],
        "Hello\r\nworld\r\n\r\n",
    ),
])
def test_apply_fixes(text, diagnostics, expected):
    assert apply_fixes(text, diagnostics) == expected


@pytest.mark.parametrize("first,second,expected", [
    # Non-overlapping deletes
    (_diag(editColumn=4, deleteCount=1), _diag(editColumn=10, deleteCount=1), "Helo word"),
    # Overlapping deletes: the one applied first wins
    (_diag(editColumn=8, deleteCount=2), _diag(editColumn=7, deleteCount=2), "Hello wld"),
    # Insert and delete at one spot become a replacement
    (_diag(editColumn=7, deleteCount=1), _diag(editColumn=7, insertText="z"), "Hello zorld"),
])
def test_apply_fixes_is_order_independent(first, second, expected):
    assert apply_fixes("Hello world", [first, second]) == expected
    assert apply_fixes("Hello world", [second, first]) == expected


def test_apply_fixes_any_permutation():
    diagnostics = [
        _diag(editColumn=1, insertText="> "),
        _diag(editColumn=6, deleteCount=1, insertText="_"),
        _diag(editColumn=12, insertText="!"),
    ]
    results = {apply_fixes("Hello world", list(p)) for p in permutations(diagnostics)}
    assert results == {"> Hello_world!"}


def test_apply_fixes_drops_duplicates():
    diagnostics = [_diag(editColumn=1, insertText="# ")] * 3
    assert apply_fixes("Heading", diagnostics) == "# Heading"


def test_apply_fixes_without_fixes_keeps_text():
    text = "Hello\r\nworld\nagain\r"
    assert apply_fixes(text, []) == text
    assert apply_fixes(text, [{"lineNumber": 1}]) == text


def test_apply_fixes_delete_touching_later_insert():
    diagnostics = [_diag(editColumn=4, deleteCount=3), _diag(editColumn=7, insertText="!")]
    assert apply_fixes("abc   ", diagnostics) == "abc!"


def test_apply_fixes_append_at_line_end():
    assert apply_fixes("abc", [_diag(editColumn=4, insertText="d")]) == "abcd"


def test_apply_fixes_fix_line_number_overrides_diagnostic():
    diagnostics = [_diag(1, lineNumber=2, editColumn=1, insertText="> ")]
    assert apply_fixes("a\nb", diagnostics) == "a\n> b"


def test_apply_fixes_explicit_line_ending():
    assert apply_fixes("a\nb", [_diag(2, deleteCount=1)], line_ending="\r\n") == "a\r\n"
