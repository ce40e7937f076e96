"""Complexity and maintainability heuristics for source text.

Complexity is an additive branch count, not the graph-theoretic cyclomatic
number: every branching keyword or operator adds one regardless of nesting.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from ..constants import (
    BASE_COMPLEXITY,
    COMPLEXITY_KEYWORDS,
    COMPLEXITY_OPERATORS,
    MAINTAINABILITY_BASE,
    MAINTAINABILITY_COMPLEXITY_WEIGHT,
    MAINTAINABILITY_FUNCTION_BONUS,
    MAINTAINABILITY_LINES_DIVISOR,
    MAINTAINABILITY_MAX,
    MAINTAINABILITY_MIN,
)
from ..core.exceptions import MetricsError
from .models import Metrics

_FUNCTION_MARKER = r"function|=>"


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return int(math.floor(value + 0.5))


def _count(pattern: str, text: str) -> int:
    return sum(1 for _ in re.finditer(pattern, text))


def count_branches(source_text: str) -> int:
    """Number of branching keywords and operators in the text."""
    keywords = sum(_count(rf"\b{kw}\b", source_text) for kw in COMPLEXITY_KEYWORDS)
    operators = sum(_count(op, source_text) for op in COMPLEXITY_OPERATORS)
    return keywords + operators


def count_lines(source_text: str) -> int:
    """Number of newline-delimited lines; an empty text has one line."""
    return source_text.count("\n") + 1


def count_functions(source_text: str) -> int:
    """Occurrences of ``function`` plus arrow-function markers."""
    return _count(_FUNCTION_MARKER, source_text)


def maintainability_index(complexity: int, line_count: int, function_count: int) -> int:
    """Maintainability score in [0, 100] from its three inputs."""
    raw = (
        MAINTAINABILITY_BASE
        - MAINTAINABILITY_COMPLEXITY_WEIGHT * complexity
        - line_count / MAINTAINABILITY_LINES_DIVISOR
        + MAINTAINABILITY_FUNCTION_BONUS * function_count
    )
    return round_half_up(min(MAINTAINABILITY_MAX, max(MAINTAINABILITY_MIN, raw)))


def compute(source_text: str) -> Metrics:
    """Compute complexity and maintainability of one source text.

    Raises:
        TypeError: If ``source_text`` is not a string.
    """
    if not isinstance(source_text, str):
        raise TypeError(f"source text must be a string, not {type(source_text).__name__}")

    complexity = BASE_COMPLEXITY + count_branches(source_text)
    maintainability = maintainability_index(
        complexity,
        count_lines(source_text),
        count_functions(source_text),
    )
    return Metrics(complexity=complexity, maintainability=maintainability)


def average_metrics(metrics: Sequence[Metrics]) -> Metrics:
    """Arithmetic mean of per-file metrics, rounded once after averaging.

    Raises:
        MetricsError: If ``metrics`` is empty.
    """
    if not metrics:
        raise MetricsError("Cannot average metrics over zero files")

    count = len(metrics)
    return Metrics(
        complexity=round_half_up(sum(m.complexity for m in metrics) / count),
        maintainability=round_half_up(sum(m.maintainability for m in metrics) / count),
    )
