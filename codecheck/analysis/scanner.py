"""Apply review rules to source text and turn matches into issues.

Matching goes through ``find_all_matches``, which keeps no state between
calls: every call scans the whole text from offset 0 with a fresh iterator,
so scanning the same rule against several files (or the same file twice)
always yields every occurrence.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..core.exceptions import PatternError
from .models import Issue, IssueType
from .patterns import Rule, get_rules_by_category

logger = logging.getLogger("codecheck.scanner")


@dataclass(frozen=True)
class Match:
    """One occurrence of a pattern in a text."""

    start: int
    text: str


def find_all_matches(pattern: str, text: str) -> list[Match]:
    """Return every non-overlapping occurrence of ``pattern`` in ``text``.

    Args:
        pattern: Regular expression source.
        text: Text to search.

    Returns:
        Matches in the order they occur. Empty matches are skipped.

    Raises:
        TypeError: If ``text`` is not a string.
        PatternError: If ``pattern`` is not a valid regular expression.
    """
    if not isinstance(text, str):
        raise TypeError(f"source text must be a string, not {type(text).__name__}")

    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Invalid pattern {pattern!r}: {e}") from e

    return [Match(m.start(), m.group()) for m in compiled.finditer(text) if m.group()]


def line_number(text: str, offset: int) -> int:
    """1-based line containing ``offset``."""
    return text.count("\n", 0, offset) + 1


def column_number(text: str, offset: int) -> int:
    """0-based column of ``offset`` within its line."""
    return offset - (text.rfind("\n", 0, offset) + 1)


def scan_rule(rule: Rule, source_text: str, file_path: str) -> list[Issue]:
    """Run a single rule against a source text."""
    try:
        matches = find_all_matches(rule.pattern, source_text)
    except PatternError as e:
        e.rule_id = rule.rule_id
        raise

    return [
        Issue(
            type=rule.category,
            severity=rule.severity,
            file=file_path,
            line=line_number(source_text, match.start),
            column=column_number(source_text, match.start),
            message=rule.message,
            suggestion=rule.suggestion,
            rule=rule.rule_id,
            evidence=match.text,
        )
        for match in matches
    ]


def scan(category: IssueType | str, source_text: str, file_path: str) -> list[Issue]:
    """Apply every rule of one category to a source text.

    Issues come back in rule definition order, then match order within the
    text. Repeated matches on the same line are all reported.

    Args:
        category: Category whose rules should run.
        source_text: The code to analyze.
        file_path: Path recorded on each issue.

    Returns:
        List of issues, possibly empty.
    """
    issues: list[Issue] = []
    for rule in get_rules_by_category(category):
        issues.extend(scan_rule(rule, source_text, file_path))

    if issues:
        logger.debug(
            "Found %d %s issue(s) in %s",
            len(issues),
            IssueType(category).value,
            file_path,
            extra={"event": "category_scanned", "file": file_path, "issues_found": len(issues)},
        )
    return issues


def scan_categories(
    categories: Iterable[IssueType | str],
    source_text: str,
    file_path: str,
) -> list[Issue]:
    """Scan several categories in the given order and concatenate the issues."""
    issues: list[Issue] = []
    for category in categories:
        issues.extend(scan(category, source_text, file_path))
    return issues
