"""Constants and configuration values for codecheck.

This module centralizes magic numbers and fixed strings that are used
across the codebase for easier maintenance.
"""

import os

# =============================================================================
# Scoring
# =============================================================================

# Points deducted from a perfect score of 100 per issue of each severity
MAX_SCORE = 100
CRITICAL_ISSUE_PENALTY = 25
HIGH_ISSUE_PENALTY = 10
MEDIUM_ISSUE_PENALTY = 5
LOW_ISSUE_PENALTY = 1


# =============================================================================
# Metrics
# =============================================================================

BASE_COMPLEXITY = 1

# maintainability = 100 - 2*complexity - lines/10 + 5*functions
MAINTAINABILITY_BASE = 100
MAINTAINABILITY_COMPLEXITY_WEIGHT = 2
MAINTAINABILITY_LINES_DIVISOR = 10
MAINTAINABILITY_FUNCTION_BONUS = 5
MAINTAINABILITY_MIN = 0
MAINTAINABILITY_MAX = 100

# Branching keywords matched as whole words
COMPLEXITY_KEYWORDS = ("if", "else", "while", "for", "switch", "case", "catch")

# Branching operators as regular expressions. A lone "?" is the conditional
# operator; "?." (optional chaining) and "??" (nullish coalescing) are not.
COMPLEXITY_OPERATORS = (r"&&", r"\|\|", r"(?<!\?)\?(?!\?|\.(?!\d))")


# =============================================================================
# Recommendations
# =============================================================================

COMPLEXITY_RECOMMENDATION_THRESHOLD = 10
MAINTAINABILITY_RECOMMENDATION_THRESHOLD = 50

RECOMMEND_FIX_SECURITY = "Review and fix security vulnerabilities immediately"
RECOMMEND_REDUCE_COMPLEXITY = (
    "Consider breaking down complex functions into smaller, more manageable pieces"
)
RECOMMEND_IMPROVE_MAINTAINABILITY = (
    "Improve code maintainability by reducing complexity and adding documentation"
)
RECOMMEND_FIX_CRITICAL = "Address critical issues before deploying to production"


# =============================================================================
# Task Contract
# =============================================================================

# File name attached to issues found in an inline code string
INLINE_CODE_FILENAME = "inline-code"

# result_type written with every stored result
RESULT_TYPE_CODE_REVIEW = "code_review"

MISSING_INPUT_MESSAGE = "Either code string or files array is required"
UNKNOWN_ERROR_MESSAGE = "Unknown error during code review"
STORE_FAILURE_MESSAGE = "Failed to store code review results"


# =============================================================================
# Logging
# =============================================================================

DEFAULT_LOG_LEVEL = os.environ.get("CODECHECK_LOG_LEVEL", "INFO")
