"""Exception types raised by the lint pipeline."""


class MarklintError(Exception):
    """Base class for all linter errors."""


class MalformedRule(MarklintError, ValueError):
    """A rule definition has a missing or wrongly shaped property."""

    def __init__(self, prop: str, index: int):
        self.property = prop
        self.index = index
        super().__init__(
            f"Property '{prop}' of custom rule at index {index} is incorrect."
        )


class DuplicateIdentifier(MarklintError, ValueError):
    """A rule name or tag collides with one already registered."""

    def __init__(self, identifier: str, kind: str, index: int):
        self.identifier = identifier
        self.kind = kind
        self.index = index
        if kind == "name":
            message = (
                f"Name '{identifier}' of custom rule at index {index} "
                "is already used as a name or tag."
            )
        else:
            message = (
                f"Tag '{identifier}' of custom rule at index {index} "
                "is already used as a name."
            )
        super().__init__(message)


class InvalidDiagnostic(MarklintError, ValueError):
    """A rule reported a diagnostic that violates the reporting contract."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Property '{path}' of onError parameter is incorrect.")


class RuleFault(MarklintError):
    """A rule's check function raised while running."""

    def __init__(self, rule_name: str, message: str):
        self.rule_name = rule_name
        super().__init__(message)


class ConfigError(MarklintError, ValueError):
    """Configuration could not be decoded or does not fit a rule's options."""
