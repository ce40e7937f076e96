"""Core utilities: the codecheck exception hierarchy."""

from .exceptions import (
    AnalysisError,
    CodeCheckError,
    ConfigurationError,
    InvalidConfigError,
    InvalidInputError,
    MetricsError,
    MissingInputError,
    PatternError,
    PersistenceError,
    ValidationError,
)

__all__ = [
    "CodeCheckError",
    "ValidationError",
    "InvalidInputError",
    "MissingInputError",
    "AnalysisError",
    "PatternError",
    "MetricsError",
    "ConfigurationError",
    "InvalidConfigError",
    "PersistenceError",
]
