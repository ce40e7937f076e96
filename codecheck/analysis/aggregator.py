"""Merge issues across categories and files and compute the review score."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..constants import (
    CRITICAL_ISSUE_PENALTY,
    HIGH_ISSUE_PENALTY,
    LOW_ISSUE_PENALTY,
    MAX_SCORE,
    MEDIUM_ISSUE_PENALTY,
)
from .metrics import average_metrics
from .models import AnalysisResult, Issue, Severity, Summary
from .recommendations import dedupe_recommendations


def count_by_severity(issues: Iterable[Issue]) -> dict[Severity, int]:
    """Number of issues per severity; every severity is present in the result."""
    counts = {severity: 0 for severity in Severity}
    for issue in issues:
        counts[issue.severity] += 1
    return counts


def score_from_counts(critical: int, high: int, medium: int, low: int) -> int:
    """Severity-weighted score, clamped at zero."""
    return max(
        0,
        MAX_SCORE
        - critical * CRITICAL_ISSUE_PENALTY
        - high * HIGH_ISSUE_PENALTY
        - medium * MEDIUM_ISSUE_PENALTY
        - low * LOW_ISSUE_PENALTY,
    )


def summarize(issues: Sequence[Issue]) -> Summary:
    """Count issues by severity and score them.

    An empty issue list scores 100.
    """
    counts = count_by_severity(issues)
    return Summary(
        total_issues=len(issues),
        critical_issues=counts[Severity.CRITICAL],
        high_issues=counts[Severity.HIGH],
        medium_issues=counts[Severity.MEDIUM],
        low_issues=counts[Severity.LOW],
        score=score_from_counts(
            counts[Severity.CRITICAL],
            counts[Severity.HIGH],
            counts[Severity.MEDIUM],
            counts[Severity.LOW],
        ),
    )


def merge_file_results(results: Sequence[AnalysisResult]) -> AnalysisResult:
    """Combine per-file results into one batch result.

    Issues are concatenated in file order, recommendations are deduplicated
    keeping first-seen order, metrics are averaged, and the summary is
    recomputed over the whole batch rather than averaged per file.
    """
    issues = [issue for result in results for issue in result.issues]
    return AnalysisResult(
        summary=summarize(issues),
        issues=issues,
        recommendations=dedupe_recommendations(r.recommendations for r in results),
        metrics=average_metrics([r.metrics for r in results]),
    )
