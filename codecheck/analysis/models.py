"""Pydantic models for code review tasks and results.

This module defines the data models used to represent detected issues,
per-file metrics, aggregated review results, and the task/result envelopes
exchanged with callers. Python attributes are snake_case; the serialized
form uses the camelCase keys of the external contract.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Severity(str, Enum):
    """Severity levels for review issues, most severe first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueType(str, Enum):
    """Categories of review rules."""

    SECURITY = "security"
    PERFORMANCE = "performance"
    BEST_PRACTICE = "best-practice"
    ACCESSIBILITY = "accessibility"


class _WireModel(BaseModel):
    """Immutable model that serializes with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON-compatible wire representation."""
        return self.model_dump(mode="json", by_alias=True)


class Issue(_WireModel):
    """A single rule violation found in one file.

    Attributes:
        type: Category of the rule that produced the issue.
        severity: Severity inherited from the rule.
        file: Path of the file (or "inline-code") the issue was found in.
        line: 1-based line number of the match.
        column: 0-based column of the match on its line.
        message: What is wrong.
        suggestion: How to fix it.
        rule: Rule identifier, e.g. "no-eval".
        evidence: The matched source text.
    """

    type: IssueType
    severity: Severity
    file: str
    line: int = Field(ge=1)
    column: int = Field(default=0, ge=0)
    message: str
    suggestion: str
    rule: str
    evidence: str


class Metrics(_WireModel):
    """Complexity and maintainability of one file or an average over files."""

    complexity: int = Field(ge=1)
    maintainability: int = Field(ge=0, le=100)


class Summary(_WireModel):
    """Issue counts by severity and the resulting 0-100 score."""

    total_issues: int = Field(default=0, ge=0)
    critical_issues: int = Field(default=0, ge=0)
    high_issues: int = Field(default=0, ge=0)
    medium_issues: int = Field(default=0, ge=0)
    low_issues: int = Field(default=0, ge=0)
    score: int = Field(default=100, ge=0, le=100)


class AnalysisResult(_WireModel):
    """Result of reviewing one source text or a batch of files."""

    summary: Summary
    issues: tuple[Issue, ...] = ()
    recommendations: tuple[str, ...] = ()
    metrics: Metrics


class AnalysisConfig(_WireModel):
    """Options controlling which rule categories run.

    Every field has a default; callers supply a partial mapping which is
    merged over the defaults (see ``codecheck.analysis.config``). The older
    key ``severity`` is accepted in place of ``severityThreshold``.
    """

    check_security: bool = True
    check_performance: bool = True
    check_best_practices: bool = True
    check_accessibility: bool = False
    severity_threshold: Severity = Field(
        default=Severity.MEDIUM,
        validation_alias=AliasChoices("severityThreshold", "severity", "severity_threshold"),
        serialization_alias="severityThreshold",
    )
    frameworks: frozenset[str] = frozenset({"react", "next.js", "express"})
    languages: frozenset[str] = frozenset({"typescript", "javascript"})

    @field_validator("severity_threshold", mode="before")
    @classmethod
    def _normalize_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def enabled_categories(self) -> list[IssueType]:
        """Categories to scan, in scan order."""
        flags = [
            (self.check_security, IssueType.SECURITY),
            (self.check_performance, IssueType.PERFORMANCE),
            (self.check_best_practices, IssueType.BEST_PRACTICE),
            (self.check_accessibility, IssueType.ACCESSIBILITY),
        ]
        return [category for enabled, category in flags if enabled]


class SourceFile(_WireModel):
    """One file submitted for review."""

    path: str
    content: str


def _now_ms() -> int:
    return int(time.time() * 1000)


class Task(_WireModel):
    """A unit of review work supplied by the caller.

    ``input`` holds either ``code`` (a string) or ``files`` (a list of
    ``{path, content}`` mappings), and optionally ``config``.
    """

    id: int
    start_time: int = Field(default_factory=_now_ms)
    input: dict[str, Any] = Field(default_factory=dict)
    config: dict[str, Any] | None = None


class ResultMetadata(_WireModel):
    """Execution metadata attached to a successful result."""

    execution_time: int = Field(ge=0)
    issues_found: int = Field(ge=0)
    score: int = Field(ge=0, le=100)
    agent: str | None = None
    version: str | None = None
    timestamp: str | None = None


class AgentResult(_WireModel):
    """Envelope returned for every task, success or failure."""

    success: bool
    data: AnalysisResult | None = None
    message: str | None = None
    error: str | None = None
    metadata: ResultMetadata | None = None

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``data`` is always present, unset optionals are omitted."""
        payload = self.model_dump(mode="json", by_alias=True)
        for key in ("message", "error", "metadata"):
            if payload.get(key) is None:
                payload.pop(key, None)
        return payload


class StoredResult(BaseModel):
    """Record handed to a result sink after a successful review."""

    model_config = ConfigDict(frozen=True)

    task_id: int
    result_type: str
    result_data: dict[str, Any]
    created_at: str
