"""
Review rules for pattern-based analysis of JavaScript/TypeScript/JSX source.

This module defines the rule registry used by the scanner. Rules are grouped
by category and kept in a fixed order; the scanner reports issues in the
order rules appear here.

Each rule includes:
- A unique rule ID (e.g., "no-eval")
- The category it reports under (security, performance, best-practice,
  accessibility)
- A default severity (critical, high, medium, low)
- A regular expression matched against raw source text
- A message describing the problem and a suggestion for fixing it

Patterns are plain strings. They are compiled by the scanner on use, so no
compiled matcher with position state is ever shared between scans.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .models import IssueType, Severity


@dataclass(frozen=True)
class Rule:
    """A single detection rule.

    Attributes:
        rule_id: Unique identifier (e.g., "no-eval").
        category: Category the resulting issues are reported under.
        pattern: Regular expression source matched against the text.
        message: Short description of the problem.
        suggestion: Guidance on how to fix the detected issue.
        severity: Default severity of the resulting issues.
    """

    rule_id: str
    category: IssueType
    pattern: str
    message: str
    suggestion: str
    severity: Severity


# ---------------------------------------------------------------------------
# A. Security
# ---------------------------------------------------------------------------

SECURITY_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="no-eval",
        category=IssueType.SECURITY,
        pattern=r"eval\s*\(",
        message="Use of eval() is dangerous and should be avoided",
        suggestion="Use JSON.parse() or other safe alternatives",
        severity=Severity.CRITICAL,
    ),
    Rule(
        rule_id="no-new-function",
        category=IssueType.SECURITY,
        pattern=r"\bnew\s+Function\s*\(",
        message="The Function constructor evaluates strings as code like eval()",
        suggestion="Define the function statically instead of building it from a string",
        severity=Severity.CRITICAL,
    ),
    Rule(
        rule_id="no-inner-html",
        category=IssueType.SECURITY,
        pattern=r"innerHTML\s*=",
        message="Direct innerHTML assignment can lead to XSS vulnerabilities",
        suggestion="Use textContent or sanitize HTML content",
        severity=Severity.HIGH,
    ),
    Rule(
        rule_id="no-dangerously-set-inner-html",
        category=IssueType.SECURITY,
        pattern=r"dangerouslySetInnerHTML\s*=",
        message="dangerouslySetInnerHTML renders raw HTML and can lead to XSS vulnerabilities",
        suggestion="Render content as JSX or sanitize HTML before injecting it",
        severity=Severity.HIGH,
    ),
    Rule(
        rule_id="no-document-write",
        category=IssueType.SECURITY,
        pattern=r"document\.write\s*\(",
        message="document.write() can be exploited for XSS attacks",
        suggestion="Use DOM manipulation methods instead",
        severity=Severity.HIGH,
    ),
    Rule(
        rule_id="env-var-exposure",
        category=IssueType.SECURITY,
        pattern=r"process\.env\.[A-Z_]+",
        message="Environment variables may be exposed in client-side code",
        suggestion="Ensure sensitive env vars are only used server-side",
        severity=Severity.MEDIUM,
    ),
)


# ---------------------------------------------------------------------------
# B. Performance
# ---------------------------------------------------------------------------

PERFORMANCE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="unnecessary-effect",
        category=IssueType.PERFORMANCE,
        pattern=r"useEffect\s*\(\s*\(\s*\)\s*=>\s*\{[^}]*\}\s*,\s*\[\s*\]\s*\)",
        message="Empty dependency array in useEffect may indicate unnecessary re-renders",
        suggestion="Consider if this effect is necessary or use useMemo/useCallback",
        severity=Severity.MEDIUM,
    ),
    Rule(
        rule_id="inefficient-chaining",
        category=IssueType.PERFORMANCE,
        pattern=r"\.map\s*\([^)]*\)\.filter\s*\(",
        message="Chaining map and filter can be inefficient for large arrays",
        suggestion="Consider using reduce or a single iteration",
        severity=Severity.LOW,
    ),
    Rule(
        rule_id="console-statements",
        category=IssueType.PERFORMANCE,
        pattern=r"console\.(?:log|warn|error|info)",
        message="Console statements should be removed in production",
        suggestion="Use a proper logging library or remove console statements",
        severity=Severity.LOW,
    ),
)


# ---------------------------------------------------------------------------
# C. Best practices
# ---------------------------------------------------------------------------

BEST_PRACTICE_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="no-var",
        category=IssueType.BEST_PRACTICE,
        pattern=r"\bvar\s+",
        message="Use let or const instead of var",
        suggestion="Replace var with let or const for better scoping",
        severity=Severity.MEDIUM,
    ),
    Rule(
        rule_id="strict-equality",
        category=IssueType.BEST_PRACTICE,
        # "==" that is neither part of "===" / "!==" nor followed by "="
        pattern=r"(?<![=!<>])==(?!=)",
        message="Use strict equality (===) instead of loose equality (==)",
        suggestion="Replace == with === for type-safe comparisons",
        severity=Severity.MEDIUM,
    ),
    Rule(
        rule_id="no-debugger",
        category=IssueType.BEST_PRACTICE,
        pattern=r"\bdebugger\s*;",
        message="debugger statements pause execution and should not be committed",
        suggestion="Remove the debugger statement",
        severity=Severity.MEDIUM,
    ),
    Rule(
        rule_id="component-naming",
        category=IssueType.BEST_PRACTICE,
        pattern=r"\bfunction\s+[A-Z]",
        message="React components should be arrow functions or use PascalCase",
        suggestion="Use arrow functions for components or ensure PascalCase naming",
        severity=Severity.LOW,
    ),
)


# ---------------------------------------------------------------------------
# D. Accessibility
# ---------------------------------------------------------------------------

ACCESSIBILITY_RULES: tuple[Rule, ...] = (
    Rule(
        rule_id="img-alt",
        category=IssueType.ACCESSIBILITY,
        pattern=r"<img(?![^>]*alt=)",
        message="Images should have alt attributes for accessibility",
        suggestion="Add alt attribute to describe the image content",
        severity=Severity.MEDIUM,
    ),
    Rule(
        rule_id="button-label",
        category=IssueType.ACCESSIBILITY,
        pattern=r"<button(?![^>]*aria-label)(?![^>]*>\s*\w)",
        message="Buttons should have accessible labels",
        suggestion="Add aria-label or ensure button has text content",
        severity=Severity.MEDIUM,
    ),
)


# ---------------------------------------------------------------------------
# Aggregate collections
# ---------------------------------------------------------------------------

ALL_RULES: tuple[Rule, ...] = (
    SECURITY_RULES
    + PERFORMANCE_RULES
    + BEST_PRACTICE_RULES
    + ACCESSIBILITY_RULES
)

RULE_CATEGORIES: Mapping[IssueType, tuple[Rule, ...]] = MappingProxyType({
    IssueType.SECURITY: SECURITY_RULES,
    IssueType.PERFORMANCE: PERFORMANCE_RULES,
    IssueType.BEST_PRACTICE: BEST_PRACTICE_RULES,
    IssueType.ACCESSIBILITY: ACCESSIBILITY_RULES,
})

# Index by rule_id for fast lookups
_RULE_INDEX: Mapping[str, Rule] = MappingProxyType({r.rule_id: r for r in ALL_RULES})


# ---------------------------------------------------------------------------
# Public query functions
# ---------------------------------------------------------------------------


def get_rule_by_id(rule_id: str) -> Rule | None:
    """Look up a rule by its ID.

    Args:
        rule_id: The unique rule identifier (e.g., "no-eval").

    Returns:
        The Rule if found, None otherwise.
    """
    return _RULE_INDEX.get(rule_id)


def get_rules_by_category(category: IssueType | str) -> tuple[Rule, ...]:
    """Get all rules for a given category, in scan order.

    Args:
        category: The IssueType (or its string value) to look up.

    Returns:
        Tuple of Rules in that category; empty for unknown categories.
    """
    try:
        category = IssueType(category)
    except ValueError:
        return ()
    return RULE_CATEGORIES.get(category, ())


def get_rules_by_severity(severity: Severity) -> list[Rule]:
    """Get all rules at a given severity level."""
    return [r for r in ALL_RULES if r.severity == severity]
