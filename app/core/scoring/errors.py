"""Error kinds raised by the check-in scoring engine.

None of these subclass ``ValueError``: pydantic only wraps ``ValueError`` and
``AssertionError`` raised inside validators, so a ``ConfigurationError``
raised while constructing a ``Template`` reaches the caller unchanged.
"""


class ScoringError(Exception):
    """Base class for all scoring failures.

    ``issues`` holds one human-readable line per problem found, so callers
    can surface every problem at once instead of fixing them one by one.
    """

    def __init__(self, message: str, issues: list[str] | None = None):
        self.issues = list(issues) if issues else [message]
        super().__init__(message)


class ConfigurationError(ScoringError):
    """The template itself is invalid and must not be published or scored."""


class ValidationError(ScoringError):
    """A submitted answer set does not fit an otherwise valid template."""


class ComputationError(ScoringError):
    """Valid inputs that still leave nothing to score (insufficient data)."""
