"""Lint engine - runs the rule pipeline over documents and applies fixes."""
import asyncio
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .directives import filter_diagnostics, inline_config_overrides
from .document import Document
from .fixes import apply_fixes
from .models import Diagnostic
from .registry import RuleLike, RuleSet, build_rule_set
from .results import DEFAULT_RESULT_VERSION, LintResults, format_results
from .rule_config import ResolvedConfig, merge_config_chain, resolve_config
from .runner import run_rules
from .scanners import DEFAULT_FRONT_MATTER_RE

logger = logging.getLogger(__name__)


@dataclass
class LintOptions:
    """Inputs and switches for one lint run."""
    # A single path is accepted as well as a sequence of paths
    files: Union[str, Path, Sequence[Union[str, Path]]] = ()
    strings: Mapping[str, Optional[str]] = field(default_factory=dict)
    config: Optional[Mapping[str, Any]] = None
    custom_rules: Sequence[RuleLike] = ()
    front_matter: Optional[re.Pattern] = DEFAULT_FRONT_MATTER_RE
    handle_rule_failures: bool = False
    no_inline_config: bool = False
    result_version: int = DEFAULT_RESULT_VERSION
    # Tokenizer override; defaults to markdown-it-py
    parser: Optional[Callable[[str], list]] = None


def _lint_document(
    document: Document,
    rule_set: RuleSet,
    resolved: ResolvedConfig,
    options: LintOptions
) -> list[Diagnostic]:
    if not options.no_inline_config:
        overrides = inline_config_overrides(document)
        if overrides:
            resolved = resolve_config(rule_set, merge_config_chain([options.config, overrides]))

    diagnostics = run_rules(document, rule_set, resolved, options.handle_rule_failures)
    diagnostics = filter_diagnostics(document, diagnostics, rule_set, options.no_inline_config)
    return sorted(diagnostics, key=lambda d: d.line_number)


def _lint_text(
    name: str,
    text: Optional[str],
    rule_set: RuleSet,
    resolved: ResolvedConfig,
    options: LintOptions
) -> list[Diagnostic]:
    document = Document.from_text(text, name, options.front_matter, options.parser)
    return _lint_document(document, rule_set, resolved, options)


def _read(path: Union[str, Path]) -> str:
    # newline="" keeps the original line endings
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _inputs(options: LintOptions) -> list[tuple[str, Optional[str], Optional[Path]]]:
    inputs: list[tuple[str, Optional[str], Optional[Path]]] = [
        (name, text, None) for name, text in options.strings.items()
    ]
    files = [options.files] if isinstance(options.files, (str, Path)) else options.files
    inputs.extend((str(path), None, Path(path)) for path in files)
    return inputs


def _prepare(options: LintOptions) -> tuple[RuleSet, ResolvedConfig]:
    rule_set = build_rule_set(options.custom_rules)
    return rule_set, resolve_config(rule_set, options.config)


def lint_sync(options: LintOptions) -> LintResults:
    """
    Lint every file and string named in options.

    Strings are linted first, then files, and results keep that order.

    Raises:
        MalformedRule, DuplicateIdentifier: Custom rules are invalid
        ConfigError: Rule options do not fit their schema
        InvalidDiagnostic, RuleFault: A rule misbehaved (strict mode)
        OSError: A file could not be read
    """
    rule_set, resolved = _prepare(options)
    results = LintResults(options.result_version, rule_set)

    for name, text, path in _inputs(options):
        if path is not None:
            text = _read(path)
        diagnostics = _lint_text(name, text, rule_set, resolved, options)
        logger.info(f"Linted {name}: {len(diagnostics)} issues")
        results[name] = format_results(diagnostics, options.result_version, rule_set)

    return results


async def lint(options: LintOptions) -> LintResults:
    """
    Lint every input concurrently, one worker thread per document.

    The rule set and resolved config are built once and shared read-only.
    """
    rule_set, resolved = _prepare(options)
    inputs = _inputs(options)

    def work(name: str, text: Optional[str], path: Optional[Path]) -> list[Diagnostic]:
        if path is not None:
            text = _read(path)
        return _lint_text(name, text, rule_set, resolved, options)

    outcomes = await asyncio.gather(
        *(asyncio.to_thread(work, name, text, path) for name, text, path in inputs)
    )

    results = LintResults(options.result_version, rule_set)
    for (name, _, _), diagnostics in zip(inputs, outcomes):
        logger.info(f"Linted {name}: {len(diagnostics)} issues")
        results[name] = format_results(diagnostics, options.result_version, rule_set)
    return results


async def lint_content(
    content: Optional[str],
    source_path: str = "<string>",
    config: Optional[Mapping[str, Any]] = None,
    custom_rules: Sequence[RuleLike] = (),
    handle_rule_failures: bool = False,
    no_inline_config: bool = False
) -> list[Diagnostic]:
    """
    Lint markdown content.

    Args:
        content: The markdown content to lint
        source_path: Identifier for reporting (doesn't need to exist)
        config: Lint configuration mapping
        custom_rules: Extra rules run after the built-in ones
        handle_rule_failures: Report rule faults as diagnostics
        no_inline_config: Ignore inline directives

    Returns:
        Diagnostics ordered by line number
    """
    options = LintOptions(
        config=config,
        custom_rules=custom_rules,
        handle_rule_failures=handle_rule_failures,
        no_inline_config=no_inline_config,
    )
    rule_set, resolved = _prepare(options)
    return _lint_text(source_path, content, rule_set, resolved, options)


async def fix_content(
    content: str,
    source_path: str = "<string>",
    config: Optional[Mapping[str, Any]] = None,
    custom_rules: Sequence[RuleLike] = ()
) -> tuple[str, list[Diagnostic]]:
    """
    Lint content and apply every available fix.

    Returns:
        Tuple of (fixed_content, diagnostics_that_carried_fixes)
    """
    diagnostics = await lint_content(content, source_path, config, custom_rules)
    fixable = [d for d in diagnostics if d.fix_info is not None]
    if not fixable:
        return content, []
    return apply_fixes(content, fixable), fixable


async def lint_file(
    path: Path,
    fix: bool = False,
    config: Optional[Mapping[str, Any]] = None,
    custom_rules: Sequence[RuleLike] = ()
) -> list[Diagnostic]:
    """
    Lint a markdown file.

    Args:
        path: Path to the .md file
        fix: If True, apply fixes and write back
        config: Lint configuration mapping
        custom_rules: Extra rules run after the built-in ones

    Returns:
        Diagnostics still present in the file (after fixing, if requested)
    """
    path = Path(path)
    content = _read(path)

    if not fix:
        return await lint_content(content, str(path), config, custom_rules)

    fixed_content, fixed = await fix_content(content, str(path), config, custom_rules)
    if fixed_content != content:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(fixed_content)
        logger.info(f"Wrote {len(fixed)} fixes to {path}")

    return await lint_content(fixed_content, str(path), config, custom_rules)


def get_available_rules(custom_rules: Sequence[RuleLike] = ()) -> dict[str, str]:
    """
    Get available rules with descriptions.

    Returns:
        Dict mapping canonical rule name to description
    """
    return {rule.name: rule.description for rule in build_rule_set(custom_rules)}
