"""Task-executing agents."""

from .base import AgentContext, AgentInfo, BaseAgent
from .code_review import CODE_REVIEW_AGENT_INFO, CodeReviewAgent, ReviewState, run_code_review

__all__ = [
    "AgentContext",
    "AgentInfo",
    "BaseAgent",
    "CODE_REVIEW_AGENT_INFO",
    "CodeReviewAgent",
    "ReviewState",
    "run_code_review",
]
