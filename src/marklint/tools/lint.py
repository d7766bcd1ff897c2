"""Lint tool implementations."""
import logging
from pathlib import Path

from marklint.config import Config
from marklint.core.linter import engine
from marklint.core.linter.fixes import apply_fixes

logger = logging.getLogger(__name__)


def _options(config: Config, result_version: int | None) -> dict:
    return {
        "config": config.lint_config(),
        "handle_rule_failures": config.handle_rule_failures,
        "no_inline_config": config.no_inline_config,
        "result_version": config.result_version if result_version is None else result_version,
    }


def register(mcp, config: Config):
    """Register lint tools with MCP server."""

    @mcp.tool()
    async def lint_markdown(
        paths: list[str] | None = None,
        content: str | None = None,
        result_version: int | None = None
    ) -> dict:
        """
        Lint Markdown files and/or a Markdown string.

        Args:
            paths: Markdown files to lint
            content: Markdown text to lint, reported under the key "content"
            result_version: Result shape 0-3 (default: server setting)

        Returns:
            Dictionary with:
            - results (dict): Per-input results in the requested shape
            - total_issues (int): Number of findings
            - text (str): One line per finding

        Example:
            {
                "paths": ["README.md"],
                "result_version": 3
            }
        """
        if not paths and content is None:
            return {"error": "Nothing to lint: pass paths or content"}

        try:
            options = engine.LintOptions(
                files=[Path(p).expanduser() for p in paths or ()],
                strings={"content": content} if content is not None else {},
                **_options(config, result_version),
            )
            logger.info(f"Linting {len(options.files) + len(options.strings)} input(s)")

            results = await engine.lint(options)
            return {
                "results": dict(results),
                "total_issues": results.count(),
                "text": results.to_string(),
            }

        except Exception as e:
            logger.error(f"Lint failed: {e}", exc_info=True)
            return {"error": str(e)}

    @mcp.tool()
    async def fix_markdown(
        path: str | None = None,
        content: str | None = None
    ) -> dict:
        """
        Apply every available fix to a Markdown file or string.

        A file is rewritten in place; a string is returned fixed.

        Args:
            path: Markdown file to fix
            content: Markdown text to fix (used when path is not given)

        Returns:
            Dictionary with:
            - fixed (int): Number of fix-bearing findings
            - content (str): Fixed text (string input only)
            - remaining (list): Findings left after fixing, result version 3
        """
        if path is None and content is None:
            return {"error": "Nothing to fix: pass path or content"}

        try:
            options = _options(config, 3)
            name = "content"
            if path is not None:
                file_path = Path(path).expanduser()
                if not file_path.exists():
                    return {"error": f"File not found: {file_path}"}
                with open(file_path, encoding="utf-8", newline="") as f:
                    content = f.read()
                name = str(file_path)

            results = await engine.lint(engine.LintOptions(strings={name: content}, **options))
            fixable = [item for item in results[name] if "fixInfo" in item]
            fixed_content = apply_fixes(content, fixable)

            if path is not None and fixed_content != content:
                with open(file_path, "w", encoding="utf-8", newline="") as f:
                    f.write(fixed_content)
                logger.info(f"Wrote {len(fixable)} fixes to {file_path}")

            remaining = await engine.lint(engine.LintOptions(strings={name: fixed_content}, **options))

            response = {"fixed": len(fixable), "remaining": remaining[name]}
            if path is None:
                response["content"] = fixed_content
            return response

        except Exception as e:
            logger.error(f"Fix failed: {e}", exc_info=True)
            return {"error": str(e)}

    @mcp.tool()
    async def get_lint_rules() -> dict:
        """
        Get list of available lint rules with descriptions.

        Returns:
            Dictionary mapping rule names to their descriptions.

        Example response:
            {
                "rules": {
                    "MD009": "Trailing spaces",
                    "MD047": "Files should end with a single newline character",
                    ...
                }
            }
        """
        return {"rules": engine.get_available_rules()}
