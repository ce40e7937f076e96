"""Shared agent scaffolding: descriptor, caller context, and result helpers."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from ..analysis.models import AgentResult, AnalysisResult, ResultMetadata

logger = logging.getLogger("codecheck.agents")


@dataclass(frozen=True)
class AgentInfo:
    """Descriptor shown to callers that list or select agents."""

    name: str
    description: str
    version: str
    capabilities: tuple[str, ...] = ()


@dataclass
class AgentContext:
    """Who is running the agent. Set by the caller, not used in analysis."""

    user_id: str
    session_id: str
    metadata: dict[str, Any] = field(default_factory=dict)


class BaseAgent(ABC):
    """Base class for agents that turn a task into an ``AgentResult``.

    Subclasses implement ``execute`` and must never let an exception escape
    it; ``handle_error`` converts one into a failure envelope.
    """

    def __init__(self, info: AgentInfo, **overrides: Any) -> None:
        known = {k: v for k, v in overrides.items() if v is not None}
        if "capabilities" in known:
            known["capabilities"] = tuple(known["capabilities"])
        self.info = replace(info, **known)
        self.context: AgentContext | None = None

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def description(self) -> str:
        return self.info.description

    @property
    def version(self) -> str:
        return self.info.version

    @property
    def capabilities(self) -> tuple[str, ...]:
        return self.info.capabilities

    def set_context(self, context: AgentContext) -> None:
        self.context = context

    def get_context(self) -> AgentContext | None:
        return self.context

    @abstractmethod
    async def execute(self, task: Any) -> AgentResult:
        """Run one task and return its result envelope."""

    def validate_input(self, payload: Any) -> bool:
        return payload is not None

    def build_metadata(self, execution_time: int, issues_found: int, score: int) -> ResultMetadata:
        """Execution metadata stamped with this agent's name and version."""
        return ResultMetadata(
            execution_time=max(0, execution_time),
            issues_found=issues_found,
            score=score,
            agent=self.name,
            version=self.version,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def create_result(
        self,
        success: bool,
        data: AnalysisResult | None = None,
        error: str | None = None,
        message: str | None = None,
        metadata: ResultMetadata | None = None,
    ) -> AgentResult:
        return AgentResult(
            success=success,
            data=data,
            error=error,
            message=message,
            metadata=metadata,
        )

    def handle_error(self, error: BaseException, fallback: str) -> AgentResult:
        """Failure envelope for ``error``; ``fallback`` is used when it has no message."""
        logger.error(f"Error in {self.name}: {error}", extra={"agent": self.name, "error": repr(error)})
        return self.create_result(False, None, str(error) or fallback)
