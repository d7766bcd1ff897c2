"""Tests for inline directives."""
from marklint.core.linter.document import Document
from marklint.core.linter.directives import disabled_by_line, inline_config_overrides
from marklint.core.linter.engine import LintOptions, lint_sync
from marklint.core.linter.registry import build_rule_set

TRAILING = "a   "


def _lines(text: str, no_inline_config: bool = False, config=None) -> list[int]:
    """Lines where MD009 is reported."""
    options = LintOptions(
        strings={"doc": text},
        config=config or {"default": False, "MD009": True},
        no_inline_config=no_inline_config,
        result_version=0,
    )
    return lint_sync(options)["doc"].get("MD009", [])


def test_no_directives():
    assert _lines(f"{TRAILING}\n{TRAILING}\n") == [1, 2]


def test_disable_and_enable():
    text = "\n".join([
        TRAILING,
        "<!-- markdownlint-disable MD009 -->",
        TRAILING,
        "<!-- markdownlint-enable MD009 -->",
        TRAILING,
    ])
    assert _lines(text) == [1, 5]


def test_bare_disable_covers_all_rules():
    text = "\n".join([
        "<!-- markdownlint-disable -->",
        TRAILING,
        TRAILING,
    ])
    assert _lines(text) == []


def test_directive_applies_on_its_own_line():
    assert _lines("a <!-- markdownlint-disable -->   \nb   ") == []


def test_disable_by_alias_and_tag():
    for identifier in ("no-trailing-spaces", "WHITESPACE", "md009"):
        text = f"<!-- markdownlint-disable {identifier} -->\n{TRAILING}"
        assert _lines(text) == [], identifier


def test_unknown_identifier_is_ignored():
    text = f"<!-- markdownlint-disable no-such-rule -->\n{TRAILING}"
    assert _lines(text) == [2]


def test_disable_other_rule_keeps_reporting():
    text = f"<!-- markdownlint-disable MD010 -->\n{TRAILING}"
    assert _lines(text) == [2]


def test_disable_next_line():
    text = "\n".join([
        "<!-- markdownlint-disable-next-line MD009 -->",
        TRAILING,
        TRAILING,
    ])
    assert _lines(text) == [3]


def test_disable_file_anywhere():
    text = "\n".join([TRAILING, TRAILING, "<!-- markdownlint-disable-file -->"])
    assert _lines(text) == []


def test_enable_file_overrides_disable_file():
    text = "\n".join([
        "<!-- markdownlint-disable-file MD009 -->",
        TRAILING,
        "<!-- markdownlint-enable-file MD009 -->",
    ])
    assert _lines(text) == [2]


def test_capture_and_restore():
    text = "\n".join([
        "<!-- markdownlint-disable MD009 -->",
        "<!-- markdownlint-capture -->",
        "<!-- markdownlint-enable MD009 -->",
        TRAILING,
        "<!-- markdownlint-restore -->",
        TRAILING,
    ])
    assert _lines(text) == [4]


def test_marklint_prefix():
    text = f"<!-- marklint-disable MD009 -->\n{TRAILING}"
    assert _lines(text) == []


def test_directive_in_code_is_inert():
    text = "\n".join([
        "```text",
        "<!-- markdownlint-disable -->",
        "```",
        TRAILING,
    ])
    assert _lines(text) == [4]


def test_directive_in_indented_code_is_inert():
    text = "\n".join([
        "Paragraph",
        "",
        "    <!-- markdownlint-disable -->",
        "",
        TRAILING,
    ])
    assert _lines(text) == [5]


def test_directive_in_front_matter_is_inert():
    text = "\n".join([
        "---",
        "<!-- markdownlint-disable -->",
        "---",
        TRAILING,
    ])
    assert _lines(text) == [4]


def test_no_inline_config_ignores_directives():
    text = f"<!-- markdownlint-disable -->\n{TRAILING}"
    assert _lines(text, no_inline_config=True) == [2]


def test_configure_file():
    text = '<!-- markdownlint-configure-file {"MD009": {"br_spaces": 3}} -->\n' + TRAILING
    assert _lines(text) == []


def test_configure_file_can_enable_rule():
    text = '<!-- markdownlint-configure-file { "no-trailing-spaces": true } -->\n' + TRAILING
    assert _lines(text, config={"default": False}) == [2]


def test_configure_file_bad_json_is_ignored():
    text = "<!-- markdownlint-configure-file { nope -->\n" + TRAILING
    assert _lines(text) == [2]


def test_configure_file_ignored_without_inline_config():
    text = '<!-- markdownlint-configure-file {"MD009": false} -->\n' + TRAILING
    assert _lines(text, no_inline_config=True) == [2]


def test_configure_file_later_directive_wins_across_case():
    text = (
        '<!-- markdownlint-configure-file {"MD009": false} -->\n'
        '<!-- markdownlint-configure-file {"md009": true} -->\n'
        + TRAILING
    )
    assert _lines(text, config={"default": False, "md009": True}) == [3]


def test_inline_config_overrides_merge():
    document = Document.from_text(
        '<!-- markdownlint-configure-file {"a": 1, "b": 1} -->\n'
        '<!-- markdownlint-configure-file {"b": 2} -->\n'
    )
    assert inline_config_overrides(document) == {"a": 1, "b": 2}


def test_disabled_by_line():
    document = Document.from_text("a\n<!-- markdownlint-disable MD009 MD010 -->\nb")
    disabled = disabled_by_line(document, build_rule_set())
    assert disabled[0] == frozenset()
    assert disabled[1] == frozenset({"md009", "md010"})
    assert disabled[2] == frozenset({"md009", "md010"})
