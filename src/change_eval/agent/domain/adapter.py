"""AgentAdapter protocol — the contract every coding-agent driver satisfies."""

from typing import Protocol

from change_eval.agent.domain.log import StandardLog
from change_eval.agent.domain.result import AgentExecutionContext, AgentExecutionResult


class AgentAdapter(Protocol):
    """Drives one external coding agent against a materialized working tree.

    ``execute`` reports agent-level failure through ``status`` rather than by
    raising; it raises only when the agent cannot be invoked at all.
    """

    @property
    def name(self) -> str: ...

    @property
    def version(self) -> str: ...

    async def check_availability(self) -> bool: ...

    async def execute(self, context: AgentExecutionContext) -> AgentExecutionResult: ...

    def normalize_log(
        self, output: str, result: AgentExecutionResult
    ) -> StandardLog: ...
