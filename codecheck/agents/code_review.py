"""
Code review agent.

Runs the pattern scanner and metrics over an inline code string or a batch
of files, scores the issues, derives recommendations, and returns the
result envelope. A finished result is handed to an optional result sink;
storage failures are logged and never change the result.

Task lifecycle::

    RECEIVED -> VALIDATED -> SCANNING -> AGGREGATED -> RESULT_READY
             -> PERSISTED -> RETURNED

Any failure before RESULT_READY ends in ERROR with a failure envelope.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from ..analysis.aggregator import merge_file_results, summarize
from ..analysis.config import DEFAULT_CONFIG, resolve_config
from ..analysis.metrics import compute
from ..analysis.models import (
    AgentResult,
    AnalysisConfig,
    AnalysisResult,
    SourceFile,
    StoredResult,
    Task,
)
from ..analysis.recommendations import recommend
from ..analysis.scanner import scan_categories
from ..constants import (
    INLINE_CODE_FILENAME,
    MISSING_INPUT_MESSAGE,
    RESULT_TYPE_CODE_REVIEW,
    STORE_FAILURE_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)
from ..core.exceptions import InvalidInputError, MissingInputError
from ..sinks.base import ResultSink
from .base import AgentInfo, BaseAgent

logger = logging.getLogger("codecheck.agents.code_review")


class ReviewState(str, Enum):
    """States a review task moves through."""

    RECEIVED = "received"
    VALIDATED = "validated"
    SCANNING = "scanning"
    AGGREGATED = "aggregated"
    RESULT_READY = "result_ready"
    PERSISTED = "persisted"
    RETURNED = "returned"
    ERROR = "error"


CODE_REVIEW_AGENT_INFO = AgentInfo(
    name="Code Review Agent",
    description="Analyzes code for security vulnerabilities, performance issues, and best practices",
    version="1.0.0",
    capabilities=("code-analysis", "security-scan", "performance-analysis", "quality-assessment"),
)


def _now_ms() -> int:
    return int(time.time() * 1000)


class CodeReviewAgent(BaseAgent):
    """Reviews JavaScript/TypeScript source for security, performance,
    best-practice and accessibility issues.

    Args:
        sink: Where finished results are stored. ``None`` skips storage.
        **overrides: Replacement values for the agent descriptor
            (``name``, ``description``, ``version``, ``capabilities``).
    """

    def __init__(self, sink: ResultSink | None = None, **overrides: Any) -> None:
        super().__init__(CODE_REVIEW_AGENT_INFO, **overrides)
        self.sink = sink

    async def execute(self, task: Task | Mapping[str, Any]) -> AgentResult:
        """Run a review task.

        Never raises: validation and processing failures come back as
        ``AgentResult(success=False, data=None, error=...)``.
        """
        task_id = task.get("id") if isinstance(task, Mapping) else getattr(task, "id", None)
        try:
            task = self._coerce_task(task)
            self._transition(task.id, ReviewState.RECEIVED)

            code, files = self._validate(task)
            config = resolve_config(task.input.get("config"), task.config)
            self._transition(task.id, ReviewState.VALIDATED)

            self._transition(task.id, ReviewState.SCANNING)
            if code:
                review = self.review_code(code, INLINE_CODE_FILENAME, config)
            else:
                review = self.review_files(files, config)
            self._transition(task.id, ReviewState.AGGREGATED)

            summary = review.summary
            result = self.create_result(
                True,
                data=review,
                message=(
                    f"Code review completed. Found {summary.total_issues} issues "
                    f"with score {summary.score}/100"
                ),
                metadata=self.build_metadata(
                    execution_time=_now_ms() - task.start_time,
                    issues_found=summary.total_issues,
                    score=summary.score,
                ),
            )
            self._transition(task.id, ReviewState.RESULT_READY)
        except MissingInputError as e:
            self._transition(task_id, ReviewState.ERROR)
            logger.warning(str(e), extra={"event": "task_rejected", "task_id": task_id})
            return self.create_result(False, None, str(e))
        except Exception as e:
            self._transition(task_id, ReviewState.ERROR)
            return self.handle_error(e, UNKNOWN_ERROR_MESSAGE)

        await self._store_review_results(task.id, review)
        self._transition(task.id, ReviewState.RETURNED)

        logger.info(
            result.message,
            extra={
                "event": "review_completed",
                "task_id": task.id,
                "issues_found": summary.total_issues,
                "score": summary.score,
                "execution_time": result.metadata.execution_time,
            },
        )
        return result

    def review_code(
        self,
        code: str,
        filename: str = INLINE_CODE_FILENAME,
        config: AnalysisConfig | None = None,
    ) -> AnalysisResult:
        """Review a single source text.

        Args:
            code: Source text to analyze.
            filename: Path recorded on every issue.
            config: Fully merged options; defaults when omitted.

        Returns:
            The analysis result for this one text.
        """
        config = config or DEFAULT_CONFIG
        issues = scan_categories(config.enabled_categories(), code, filename)
        metrics = compute(code)
        return AnalysisResult(
            summary=summarize(issues),
            issues=issues,
            recommendations=recommend(issues, metrics),
            metrics=metrics,
        )

    def review_files(
        self,
        files: Sequence[SourceFile | Mapping[str, Any]],
        config: AnalysisConfig | None = None,
    ) -> AnalysisResult:
        """Review files one by one, in order, and merge the results.

        Raises:
            InvalidInputError: If ``files`` is not a non-empty list.
        """
        if isinstance(files, (str, bytes)) or not isinstance(files, Sequence):
            raise InvalidInputError("files must be a list of {path, content} objects")
        if not files:
            raise InvalidInputError("files array must not be empty")

        results = []
        for entry in files:
            source = entry if isinstance(entry, SourceFile) else SourceFile.model_validate(entry)
            results.append(self.review_code(source.content, source.path, config))
            logger.debug(
                "Reviewed %s",
                source.path,
                extra={
                    "event": "file_reviewed",
                    "file": source.path,
                    "issues_found": len(results[-1].issues),
                },
            )
        return merge_file_results(results)

    def _coerce_task(self, task: Task | Mapping[str, Any]) -> Task:
        if isinstance(task, Task):
            return task
        if not self.validate_input(task) or not isinstance(task, Mapping):
            raise InvalidInputError("task must be a mapping with an id and an input object")
        return Task.model_validate(task)

    def _validate(self, task: Task) -> tuple[Any, Any]:
        code = task.input.get("code")
        files = task.input.get("files")
        if not code and files is None:
            raise MissingInputError(MISSING_INPUT_MESSAGE)
        return code, files

    async def _store_review_results(self, task_id: int, review: AnalysisResult) -> None:
        """Hand the result to the sink; failures are logged only."""
        if self.sink is None:
            logger.debug("No result sink configured; skipping storage", extra={"task_id": task_id})
            return

        try:
            record = StoredResult(
                task_id=task_id,
                result_type=RESULT_TYPE_CODE_REVIEW,
                result_data=review.to_dict(),
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            await self.sink.store(record)
            self._transition(task_id, ReviewState.PERSISTED)
        except Exception as e:
            logger.error(
                f"{STORE_FAILURE_MESSAGE}: {e}",
                extra={"event": "store_failed", "task_id": task_id, "error": repr(e)},
            )

    def _transition(self, task_id: int | None, state: ReviewState) -> None:
        logger.debug(
            "Task %s -> %s",
            task_id,
            state.value,
            extra={"event": "state_changed", "task_id": task_id, "state": state.value},
        )


def run_code_review(
    task: Task | Mapping[str, Any],
    sink: ResultSink | None = None,
) -> AgentResult:
    """Synchronous helper: run one task on a fresh agent."""
    return asyncio.run(CodeReviewAgent(sink=sink).execute(task))
