"""Observer port for the agent domain — defines events in domain language."""

from typing import Protocol


class AgentObserver(Protocol):
    def agent_execution_started(self, adapter: str, working_dir: str) -> None: ...

    def agent_execution_completed(
        self, adapter: str, status: str, exit_code: int, duration_ms: int
    ) -> None: ...

    def agent_execution_failed(self, adapter: str, reason: str) -> None: ...
