"""In-process result sinks."""

import logging

from ..analysis.models import StoredResult
from ..core.exceptions import PersistenceError
from .base import ResultSink

logger = logging.getLogger("codecheck.sinks")


class InMemoryResultSink(ResultSink):
    """Keeps stored records in a list, in arrival order."""

    def __init__(self) -> None:
        self.records: list[StoredResult] = []

    async def store(self, record: StoredResult) -> None:
        self.records.append(record)

    def for_task(self, task_id: int) -> list[StoredResult]:
        """Records stored for one task."""
        return [r for r in self.records if r.task_id == task_id]

    def clear(self) -> None:
        self.records.clear()


class LoggingResultSink(ResultSink):
    """Writes each record to the log instead of a database."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    async def store(self, record: StoredResult) -> None:
        summary = record.result_data.get("summary") or {}
        try:
            issues_found = summary.get("totalIssues")
            score = summary.get("score")
        except AttributeError as e:
            raise PersistenceError(
                f"Malformed review summary: {e}", task_id=record.task_id
            ) from e
        logger.log(
            self.level,
            "Stored %s result for task %s",
            record.result_type,
            record.task_id,
            extra={
                "event": "result_stored",
                "task_id": record.task_id,
                "issues_found": issues_found,
                "score": score,
            },
        )
