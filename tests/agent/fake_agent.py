"""FakeAgentAdapter — in-memory AgentAdapter that edits the tree it is given."""

from collections.abc import Callable
from pathlib import Path

from change_eval.agent.domain.log import (
    AgentInfo,
    EnvironmentInfo,
    ExecutionInfo,
    LogMessage,
    ModelInfo,
    StandardLog,
)
from change_eval.agent.domain.result import AgentExecutionContext, AgentExecutionResult

_TIMESTAMP = "2026-01-01T00:00:00+00:00"


def make_standard_log(prompt: str = "Add a greeting function.") -> StandardLog:
    return StandardLog(
        agent=AgentInfo(name="fake", version="0.0.1", adapter_version="0.0.1"),
        model=ModelInfo(name="fake-model", provider="fake"),
        execution=ExecutionInfo(
            started_at=_TIMESTAMP,
            completed_at=_TIMESTAMP,
            duration_ms=10,
            exit_code=0,
            status="success",
        ),
        messages=[
            LogMessage(role="user", content=prompt, timestamp=_TIMESTAMP),
            LogMessage(role="assistant", content="Done.", timestamp=_TIMESTAMP),
        ],
        environment=EnvironmentInfo(
            os="test",
            python_version="3.12",
            tool_version="0.1.0",
            working_directory="/tmp",
        ),
    )


class FakeAgentAdapter:
    """Satisfies the AgentAdapter protocol.

    ``edit`` is called with the repo directory to simulate the agent's change.
    Received contexts are recorded for assertion.
    """

    def __init__(
        self,
        edit: Callable[[Path], None] | None = None,
        available: bool = True,
        status: str = "success",
    ) -> None:
        self._edit = edit
        self._available = available
        self._status = status
        self._contexts: list[AgentExecutionContext] = []

    @property
    def name(self) -> str:
        return "fake"

    @property
    def version(self) -> str:
        return "0.0.1"

    @property
    def contexts(self) -> list[AgentExecutionContext]:
        return self._contexts

    async def check_availability(self) -> bool:
        return self._available

    async def execute(self, context: AgentExecutionContext) -> AgentExecutionResult:
        self._contexts.append(context)
        if self._edit is not None:
            self._edit(context.repo_dir)
        return AgentExecutionResult(
            status=self._status,  # type: ignore[arg-type]
            exit_code=0 if self._status == "success" else 1,
            output="Done.",
            started_at=_TIMESTAMP,
            completed_at=_TIMESTAMP,
            duration_ms=10,
        )

    def normalize_log(self, output: str, result: AgentExecutionResult) -> StandardLog:
        return make_standard_log()
