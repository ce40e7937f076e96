"""Destinations for finished review results."""

from .base import ResultSink
from .memory import InMemoryResultSink, LoggingResultSink

__all__ = [
    "ResultSink",
    "InMemoryResultSink",
    "LoggingResultSink",
]
