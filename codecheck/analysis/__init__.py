"""Pattern-based analysis of JavaScript / TypeScript / JSX source text.

Quick start::

    from codecheck.analysis import scan, compute, summarize, recommend

    issues = scan("security", 'eval("x")', "app.js")
    metrics = compute('eval("x")')
    print(summarize(issues).score, recommend(issues, metrics))
"""

from .aggregator import count_by_severity, merge_file_results, summarize
from .config import DEFAULT_CONFIG, merge_config, resolve_config
from .metrics import average_metrics, compute
from .models import (
    AgentResult,
    AnalysisConfig,
    AnalysisResult,
    Issue,
    IssueType,
    Metrics,
    ResultMetadata,
    Severity,
    SourceFile,
    StoredResult,
    Summary,
    Task,
)
from .patterns import ALL_RULES, RULE_CATEGORIES, Rule, get_rule_by_id, get_rules_by_category
from .recommendations import dedupe_recommendations, recommend
from .scanner import Match, find_all_matches, scan, scan_categories

__all__ = [
    "ALL_RULES",
    "AgentResult",
    "AnalysisConfig",
    "AnalysisResult",
    "DEFAULT_CONFIG",
    "Issue",
    "IssueType",
    "Match",
    "Metrics",
    "RULE_CATEGORIES",
    "ResultMetadata",
    "Rule",
    "Severity",
    "SourceFile",
    "StoredResult",
    "Summary",
    "Task",
    "average_metrics",
    "compute",
    "count_by_severity",
    "dedupe_recommendations",
    "find_all_matches",
    "get_rule_by_id",
    "get_rules_by_category",
    "merge_config",
    "merge_file_results",
    "recommend",
    "resolve_config",
    "scan",
    "scan_categories",
    "summarize",
]
