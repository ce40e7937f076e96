"""Derive review guidance from detected issues and metrics."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from ..constants import (
    COMPLEXITY_RECOMMENDATION_THRESHOLD,
    MAINTAINABILITY_RECOMMENDATION_THRESHOLD,
    RECOMMEND_FIX_CRITICAL,
    RECOMMEND_FIX_SECURITY,
    RECOMMEND_IMPROVE_MAINTAINABILITY,
    RECOMMEND_REDUCE_COMPLEXITY,
)
from .models import Issue, IssueType, Metrics, Severity

Predicate = Callable[[Sequence[Issue], Metrics], bool]


def _has_security_issue(issues: Sequence[Issue], metrics: Metrics) -> bool:
    return any(i.type == IssueType.SECURITY for i in issues)


def _is_complex(issues: Sequence[Issue], metrics: Metrics) -> bool:
    return metrics.complexity > COMPLEXITY_RECOMMENDATION_THRESHOLD


def _is_hard_to_maintain(issues: Sequence[Issue], metrics: Metrics) -> bool:
    return metrics.maintainability < MAINTAINABILITY_RECOMMENDATION_THRESHOLD


def _has_critical_issue(issues: Sequence[Issue], metrics: Metrics) -> bool:
    return any(i.severity == Severity.CRITICAL for i in issues)


# Evaluated in order; every matching entry contributes its message.
RECOMMENDATION_CHECKS: tuple[tuple[Predicate, str], ...] = (
    (_has_security_issue, RECOMMEND_FIX_SECURITY),
    (_is_complex, RECOMMEND_REDUCE_COMPLEXITY),
    (_is_hard_to_maintain, RECOMMEND_IMPROVE_MAINTAINABILITY),
    (_has_critical_issue, RECOMMEND_FIX_CRITICAL),
)


def recommend(issues: Sequence[Issue], metrics: Metrics) -> list[str]:
    """Recommendations for one review, in check order."""
    return [message for predicate, message in RECOMMENDATION_CHECKS if predicate(issues, metrics)]


def dedupe_recommendations(recommendation_lists: Iterable[Iterable[str]]) -> list[str]:
    """Concatenate recommendation lists, dropping repeats but keeping first-seen order."""
    seen: set[str] = set()
    merged: list[str] = []
    for recommendations in recommendation_lists:
        for message in recommendations:
            if message not in seen:
                seen.add(message)
                merged.append(message)
    return merged
