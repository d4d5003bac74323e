"""StructlogAgentObserver — production observer that delegates to structlog."""

import structlog


class StructlogAgentObserver:
    """Logs agent domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def agent_execution_started(self, adapter: str, working_dir: str) -> None:
        self._log.info(
            "agent.execution.started", adapter=adapter, working_dir=working_dir
        )

    def agent_execution_completed(
        self, adapter: str, status: str, exit_code: int, duration_ms: int
    ) -> None:
        log = self._log.info if status == "success" else self._log.warning
        log(
            "agent.execution.completed",
            adapter=adapter,
            status=status,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )

    def agent_execution_failed(self, adapter: str, reason: str) -> None:
        self._log.error("agent.execution.failed", adapter=adapter, reason=reason)
