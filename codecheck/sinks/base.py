"""
Result sink interface.

A result sink receives finished review results for storage. Sinks are
external collaborators: the task runner awaits them after the result is
built and logs any failure without changing the result.
"""

from abc import ABC, abstractmethod

from ..analysis.models import StoredResult


class ResultSink(ABC):
    """Abstract interface for storing review results."""

    @abstractmethod
    async def store(self, record: StoredResult) -> None:
        """
        Store one review result.

        Args:
            record: The result row (task id, result type, payload, timestamp)

        Raises:
            PersistenceError: If the record could not be stored
        """
        pass
