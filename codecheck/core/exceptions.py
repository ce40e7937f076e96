"""Custom exception hierarchy for codecheck.

Errors raised while validating a task or analyzing source text derive from
`CodeCheckError`, so the task runner can tell its own failures apart from
programming errors while still converting both into failure envelopes.
"""


class CodeCheckError(Exception):
    """Base exception for all codecheck errors.

    All custom exceptions should inherit from this class to allow
    callers to catch all codecheck-specific errors with a single
    except clause when appropriate.
    """
    pass


# =============================================================================
# Validation Errors
# =============================================================================

class ValidationError(CodeCheckError):
    """Base exception for input validation errors."""
    pass


class InvalidInputError(ValidationError):
    """Invalid input provided to a function or task."""
    pass


class MissingInputError(ValidationError):
    """A task carried neither source code nor files."""
    pass


# =============================================================================
# Analysis Errors
# =============================================================================

class AnalysisError(CodeCheckError):
    """Base exception for errors raised while analyzing source text."""
    pass


class PatternError(AnalysisError):
    """A rule pattern could not be compiled or applied."""

    def __init__(self, message: str, rule_id: str | None = None):
        super().__init__(message)
        self.rule_id = rule_id


class MetricsError(AnalysisError):
    """Metrics could not be computed for the given input."""
    pass


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(CodeCheckError):
    """Base exception for configuration errors."""
    pass


class InvalidConfigError(ConfigurationError):
    """Analysis configuration is invalid or malformed."""
    pass


# =============================================================================
# Persistence Errors
# =============================================================================

class PersistenceError(CodeCheckError):
    """A result sink failed to store a review result."""

    def __init__(self, message: str, task_id: int | None = None):
        super().__init__(message)
        self.task_id = task_id
