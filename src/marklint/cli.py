"""CLI for marklint.

Provides terminal access to the linter without MCP.
"""
import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from marklint import __version__
from marklint.config import Config
from marklint.core.linter import LintOptions, apply_fixes, build_rule_set, lint_sync
from marklint.core.linter.errors import MarklintError
from marklint.core.linter.results import RESULT_VERSIONS

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="marklint",
        description="Lint Markdown files and apply automatic fixes"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log progress to stderr"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # check command
    c = subparsers.add_parser("check", help="Lint Markdown files")
    c.add_argument("files", type=Path, nargs="+", help="Markdown files to lint")
    c.add_argument(
        "-c", "--config", type=Path,
        help="Lint configuration file (default: $MARKLINT_CONFIG)"
    )
    c.add_argument(
        "--fix", action="store_true",
        help="Apply available fixes and write files back"
    )
    c.add_argument(
        "--result-version", type=int, choices=RESULT_VERSIONS,
        help="Result shape (default: 2)"
    )
    c.add_argument(
        "--alias", action="store_true",
        help="Show rule aliases instead of names (result version 0)"
    )
    c.add_argument(
        "--json", action="store_true",
        help="Print results as JSON"
    )
    c.add_argument(
        "--handle-rule-failures", action="store_true",
        help="Report failing rules as findings instead of aborting"
    )
    c.add_argument(
        "--no-inline-config", action="store_true",
        help="Ignore inline <!-- markdownlint-... --> directives"
    )

    # rules command
    subparsers.add_parser("rules", help="List available rules")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)]
    )

    if args.command == "check":
        return check_command(args)
    return rules_command()


def _read(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _fix_files(options: LintOptions) -> int:
    """Apply fixes in place; returns the number of files changed."""
    fix_options = LintOptions(
        files=options.files,
        config=options.config,
        handle_rule_failures=options.handle_rule_failures,
        no_inline_config=options.no_inline_config,
        result_version=3,
    )
    results = lint_sync(fix_options)

    changed = 0
    for path in options.files:
        original = _read(path)
        fixed = apply_fixes(original, results[str(path)])
        if fixed != original:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(fixed)
            changed += 1
    return changed


def check_command(args) -> int:
    """Execute the check command."""
    config = Config.load()
    err = Console(stderr=True)

    try:
        options = LintOptions(
            files=args.files,
            config=config.lint_config(args.config),
            handle_rule_failures=args.handle_rule_failures or config.handle_rule_failures,
            no_inline_config=args.no_inline_config or config.no_inline_config,
            result_version=(
                args.result_version if args.result_version is not None
                else config.result_version
            ),
        )

        if args.fix:
            changed = _fix_files(options)
            err.print(f"Fixed {changed} file(s)")

        results = lint_sync(options)

    except (MarklintError, OSError) as e:
        err.print(f"[red]Error:[/red] {e}")
        return EXIT_ERROR

    if args.json:
        print(json.dumps(results, indent=2))
    elif text := results.to_string(use_alias=args.alias):
        print(text)

    return EXIT_FINDINGS if results.count() else EXIT_OK


def rules_command() -> int:
    """Execute the rules command."""
    console = Console()

    table = Table(title=f"marklint v{__version__} rules")
    table.add_column("Rule", style="bold")
    table.add_column("Aliases")
    table.add_column("Description")
    table.add_column("Tags", style="dim")

    for rule in build_rule_set():
        style = "strike dim" if rule.deprecated else ""
        table.add_row(
            Text(rule.name, style=style),
            Text(", ".join(rule.names[1:]), style=style),
            Text(rule.description + (" (deprecated)" if rule.deprecated else ""), style=style),
            ", ".join(rule.tags),
        )

    console.print(table)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
