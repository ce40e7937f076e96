"""codecheck - rule-based review and scoring of JavaScript/TypeScript source."""

from .agents import CodeReviewAgent, run_code_review
from .analysis import AgentResult, AnalysisConfig, AnalysisResult, Task

__version__ = "1.0.0"

__all__ = [
    "AgentResult",
    "AnalysisConfig",
    "AnalysisResult",
    "CodeReviewAgent",
    "Task",
    "run_code_review",
]
