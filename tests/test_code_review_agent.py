"""
Tests for the code review agent task contract.
"""

import asyncio
import logging
import time
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from codecheck.agents.base import AgentContext
from codecheck.agents.code_review import CodeReviewAgent, ReviewState, run_code_review
from codecheck.analysis.models import AgentResult, IssueType, Metrics, SourceFile, Task
from codecheck.constants import (
    MISSING_INPUT_MESSAGE,
    RECOMMEND_FIX_CRITICAL,
    RECOMMEND_FIX_SECURITY,
    RECOMMEND_REDUCE_COMPLEXITY,
)
from codecheck.core.exceptions import PersistenceError
from codecheck.sinks import InMemoryResultSink, ResultSink

MIXED_CODE = 'eval("test"); var x = 1; console.log(x);'


def make_task(task_id: int = 1, **input_fields) -> dict:
    return {"id": task_id, "startTime": int(time.time() * 1000), "input": input_fields}


@pytest.fixture
def sink():
    """In-memory sink that records stored results."""
    return InMemoryResultSink()


@pytest.fixture
def agent(sink):
    """Create an agent wired to the in-memory sink."""
    return CodeReviewAgent(sink=sink)


class TestConstructor:
    """Test the agent descriptor."""

    def test_defaults(self):
        agent = CodeReviewAgent()
        assert agent.name == "Code Review Agent"
        assert agent.description == (
            "Analyzes code for security vulnerabilities, performance issues, and best practices"
        )
        assert agent.version == "1.0.0"
        for capability in ["code-analysis", "security-scan", "performance-analysis", "quality-assessment"]:
            assert capability in agent.capabilities
        assert agent.sink is None

    def test_overrides(self):
        agent = CodeReviewAgent(name="Custom Code Review Agent", version="2.0.0")
        assert agent.name == "Custom Code Review Agent"
        assert agent.version == "2.0.0"
        assert agent.description.startswith("Analyzes code")

    def test_context(self):
        agent = CodeReviewAgent()
        assert agent.get_context() is None
        context = AgentContext(user_id="u1", session_id="s1")
        agent.set_context(context)
        assert agent.get_context() is context


class TestExecute:
    """Test successful task execution."""

    @pytest.mark.asyncio
    async def test_inline_code_with_defaults(self, agent):
        result = await agent.execute(make_task(code=MIXED_CODE))

        assert isinstance(result, AgentResult)
        assert result.success is True
        assert result.error is None

        rules = [(i.type, i.rule) for i in result.data.issues]
        assert rules == [
            (IssueType.SECURITY, "no-eval"),
            (IssueType.PERFORMANCE, "console-statements"),
            (IssueType.BEST_PRACTICE, "no-var"),
        ]
        assert all(i.file == "inline-code" for i in result.data.issues)

        summary = result.data.summary
        assert summary.total_issues == 3
        assert summary.critical_issues == 1
        assert summary.medium_issues == 1
        assert summary.low_issues == 1
        # 100 - 25 - 5 - 1
        assert summary.score == 69

        assert result.data.recommendations == (RECOMMEND_FIX_SECURITY, RECOMMEND_FIX_CRITICAL)
        assert result.data.metrics == Metrics(complexity=1, maintainability=98)
        assert result.message == "Code review completed. Found 3 issues with score 69/100"

    @pytest.mark.asyncio
    async def test_metadata(self, agent):
        task = make_task(code=MIXED_CODE)
        task["startTime"] -= 50

        result = await agent.execute(task)

        assert result.metadata.execution_time >= 50
        assert result.metadata.issues_found == 3
        assert result.metadata.score == 69
        assert result.metadata.agent == "Code Review Agent"
        assert result.metadata.version == "1.0.0"
        datetime.fromisoformat(result.metadata.timestamp)

    @pytest.mark.asyncio
    async def test_clean_code(self, agent):
        result = await agent.execute(make_task(code='const hello = "world";'))
        assert result.success is True
        assert result.data.issues == ()
        assert result.data.summary.score == 100
        assert result.data.recommendations == ()
        assert result.data.metrics.maintainability > 80

    @pytest.mark.asyncio
    async def test_accepts_task_model(self, agent):
        task = Task(id=7, input={"code": "eval(x)"})
        result = await agent.execute(task)
        assert result.success is True
        assert result.data.summary.critical_issues == 1

    @pytest.mark.asyncio
    async def test_complex_code_recommendation(self, agent):
        code = "\n".join("if (a) {}" for _ in range(10))
        result = await agent.execute(make_task(code=code))
        assert result.data.metrics.complexity == 11
        assert result.data.recommendations == (RECOMMEND_REDUCE_COMPLEXITY,)

    @pytest.mark.asyncio
    async def test_wire_format(self, agent):
        result = await agent.execute(make_task(code=MIXED_CODE))
        payload = result.to_dict()

        assert payload["success"] is True
        assert "error" not in payload
        assert set(payload["data"]) == {"summary", "issues", "recommendations", "metrics"}
        assert payload["data"]["summary"]["totalIssues"] == 3
        assert payload["data"]["issues"][0]["type"] == "security"
        assert payload["data"]["issues"][0]["severity"] == "critical"
        assert payload["data"]["issues"][2]["type"] == "best-practice"
        assert set(payload["metadata"]) >= {"executionTime", "issuesFound", "score"}


class TestFiles:
    """Test multi-file review."""

    @pytest.mark.asyncio
    async def test_file_based_review(self, agent):
        task = make_task(
            files=[
                {"path": "test.ts", "content": 'console.log("test");'},
                {"path": "app.ts", "content": 'eval("dangerous code");'},
            ]
        )
        result = await agent.execute(task)

        assert result.success is True
        assert [(i.file, i.rule) for i in result.data.issues] == [
            ("test.ts", "console-statements"),
            ("app.ts", "no-eval"),
        ]
        # 100 - 25 - 1 over the whole batch
        assert result.data.summary.score == 74
        assert result.data.recommendations == (RECOMMEND_FIX_SECURITY, RECOMMEND_FIX_CRITICAL)

    @pytest.mark.asyncio
    async def test_recommendations_are_deduplicated(self, agent):
        task = make_task(
            files=[
                {"path": "a.js", "content": "eval(a);"},
                {"path": "b.js", "content": "eval(b);"},
            ]
        )
        result = await agent.execute(task)
        assert result.data.recommendations == (RECOMMEND_FIX_SECURITY, RECOMMEND_FIX_CRITICAL)
        assert result.data.summary.critical_issues == 2

    @pytest.mark.asyncio
    async def test_metrics_are_averaged(self, agent):
        task = make_task(
            files=[
                {"path": "a.js", "content": "if (x) {}"},
                {"path": "b.js", "content": ""},
            ]
        )
        result = await agent.execute(task)
        # complexity (2 + 1) / 2 = 1.5, maintainability (96 + 98) / 2 = 97
        assert result.data.metrics == Metrics(complexity=2, maintainability=97)

    def test_review_files_accepts_models(self, agent):
        result = agent.review_files([SourceFile(path="a.js", content="var a = 1;")])
        assert [i.rule for i in result.issues] == ["no-var"]

    def test_code_takes_precedence_over_files(self):
        result = run_code_review(
            make_task(code="eval(x)", files=[{"path": "a.js", "content": "var a;"}])
        )
        assert [i.file for i in result.data.issues] == ["inline-code"]


class TestConfiguration:
    """Test how task configuration reaches the scanner."""

    @pytest.mark.asyncio
    async def test_disabled_security(self, agent):
        task = make_task(code=MIXED_CODE, config={"checkSecurity": False})
        result = await agent.execute(task)
        types = {i.type for i in result.data.issues}
        assert IssueType.SECURITY not in types
        assert IssueType.PERFORMANCE in types
        assert IssueType.BEST_PRACTICE in types

    @pytest.mark.asyncio
    async def test_accessibility_is_opt_in(self, agent):
        code = '<img src="logo.png">'
        default = await agent.execute(make_task(code=code))
        assert default.data.issues == ()

        enabled = await agent.execute(make_task(code=code, config={"checkAccessibility": True}))
        assert [i.rule for i in enabled.data.issues] == ["img-alt"]

    @pytest.mark.asyncio
    async def test_task_config_overrides_input_config(self, agent):
        task = make_task(code=MIXED_CODE, config={"checkSecurity": False})
        task["config"] = {"checkSecurity": True}
        result = await agent.execute(task)
        assert any(i.type == IssueType.SECURITY for i in result.data.issues)

    @pytest.mark.asyncio
    async def test_invalid_config_fails_the_task(self, agent):
        result = await agent.execute(make_task(code=MIXED_CODE, config={"severity": "urgent"}))
        assert result.success is False
        assert "Invalid review config" in result.error
        assert result.data is None


class TestFailures:
    """Test validation and processing failures."""

    @pytest.mark.asyncio
    async def test_missing_code_and_files(self, agent, sink):
        result = await agent.execute(make_task())

        assert result.success is False
        assert result.error == MISSING_INPUT_MESSAGE
        assert result.data is None
        assert result.to_dict() == {"success": False, "data": None, "error": MISSING_INPUT_MESSAGE}
        assert sink.records == []

    @pytest.mark.asyncio
    async def test_null_code(self, agent):
        result = await agent.execute(make_task(code=None))
        assert result.success is False
        assert result.error
        assert result.data is None

    @pytest.mark.asyncio
    async def test_non_string_code(self, agent):
        result = await agent.execute(make_task(code=12345))
        assert result.success is False
        assert "must be a string" in result.error
        assert result.data is None

    @pytest.mark.asyncio
    async def test_empty_files(self, agent):
        result = await agent.execute(make_task(files=[]))
        assert result.success is False
        assert result.error == "files array must not be empty"

    @pytest.mark.asyncio
    async def test_malformed_file_entry(self, agent, sink):
        result = await agent.execute(make_task(files=[{"path": "a.js"}]))
        assert result.success is False
        assert result.data is None
        assert sink.records == []

    @pytest.mark.asyncio
    async def test_files_not_a_list(self, agent):
        result = await agent.execute(make_task(files="a.js"))
        assert result.success is False
        assert "list" in result.error

    @pytest.mark.asyncio
    async def test_task_without_id(self, agent):
        result = await agent.execute({"input": {"code": "eval(x)"}})
        assert result.success is False
        assert result.data is None

    @pytest.mark.asyncio
    async def test_task_none(self, agent):
        result = await agent.execute(None)
        assert result.success is False
        assert result.data is None


class TestPersistence:
    """Test handing results to the sink."""

    @pytest.mark.asyncio
    async def test_result_is_stored(self, agent, sink):
        result = await agent.execute(make_task(task_id=123, code='console.log("test");'))

        assert len(sink.records) == 1
        record = sink.records[0]
        assert record.task_id == 123
        assert record.result_type == "code_review"
        assert record.result_data == result.data.to_dict()
        datetime.fromisoformat(record.created_at)
        assert sink.for_task(123) == [record]

    @pytest.mark.asyncio
    async def test_sink_failure_keeps_success(self, caplog):
        failing_sink = AsyncMock(spec=ResultSink)
        failing_sink.store.side_effect = PersistenceError("Database error")
        agent = CodeReviewAgent(sink=failing_sink)

        with caplog.at_level(logging.ERROR, logger="codecheck"):
            result = await agent.execute(make_task(code='console.log("test");'))

        assert result.success is True
        assert result.data.summary.total_issues == 1
        failing_sink.store.assert_awaited_once()
        assert "Failed to store code review results: Database error" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_sink_exception_is_contained(self):
        failing_sink = AsyncMock(spec=ResultSink)
        failing_sink.store.side_effect = RuntimeError("connection reset")
        agent = CodeReviewAgent(sink=failing_sink)

        result = await agent.execute(make_task(code="eval(x)"))

        assert result.success is True
        assert result.metadata.score == 75

    @pytest.mark.asyncio
    async def test_no_sink(self):
        result = await CodeReviewAgent().execute(make_task(code="eval(x)"))
        assert result.success is True

    @pytest.mark.asyncio
    async def test_stored_result_cannot_be_altered(self, agent, sink):
        result = await agent.execute(make_task(code="eval(x)"))

        with pytest.raises(AttributeError):
            result.data.issues.clear()
        with pytest.raises(AttributeError):
            result.data.recommendations.append("Ship it")
        assert result.data.summary.total_issues == len(result.data.issues) == 1
        assert sink.records[0].result_data == result.data.to_dict()


class TestConcurrency:
    """Independent tasks share nothing but the rule registry."""

    @pytest.mark.asyncio
    async def test_parallel_tasks_give_identical_results(self, agent):
        code = "eval(a);\neval(b);\nvar c = 1;"
        results = await asyncio.gather(
            *(agent.execute(make_task(task_id=n, code=code)) for n in range(5))
        )
        issue_sets = [[(i.rule, i.line) for i in r.data.issues] for r in results]
        assert all(issues == issue_sets[0] for issues in issue_sets)
        assert issue_sets[0] == [("no-eval", 1), ("no-eval", 2), ("no-var", 3)]

    def test_repeated_sync_runs(self):
        first = run_code_review(make_task(code="eval(a); eval(b);"))
        second = run_code_review(make_task(code="eval(a); eval(b);"))
        assert first.data.issues == second.data.issues
        assert len(first.data.issues) == 2


def test_review_states_are_ordered():
    assert [s.value for s in ReviewState][:5] == [
        "received",
        "validated",
        "scanning",
        "aggregated",
        "result_ready",
    ]
