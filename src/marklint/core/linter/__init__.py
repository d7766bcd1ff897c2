"""Rule-based markdown linter."""
from .engine import (
    LintOptions,
    fix_content,
    get_available_rules,
    lint,
    lint_content,
    lint_file,
    lint_sync,
)
from .errors import (
    ConfigError,
    DuplicateIdentifier,
    InvalidDiagnostic,
    MalformedRule,
    MarklintError,
    RuleFault,
)
from .fixes import apply_fix, apply_fixes
from .models import Diagnostic, FixInfo, Rule, RuleParams
from .registry import RuleSet, build_rule_set
from .results import LintResults, format_results
from .rule_config import read_config, resolve_config

__all__ = [
    "LintOptions",
    "lint",
    "lint_sync",
    "lint_content",
    "lint_file",
    "fix_content",
    "get_available_rules",
    "apply_fix",
    "apply_fixes",
    "read_config",
    "resolve_config",
    "build_rule_set",
    "RuleSet",
    "LintResults",
    "format_results",
    "Rule",
    "RuleParams",
    "Diagnostic",
    "FixInfo",
    "MarklintError",
    "MalformedRule",
    "DuplicateIdentifier",
    "InvalidDiagnostic",
    "RuleFault",
    "ConfigError",
]
