"""Error types raised while orchestrating a run."""

from change_eval.core.errors import ChangeEvalError


class RunTimeoutError(ChangeEvalError):
    """Raised when the whole run exceeds its configured time budget."""

    def __init__(self, run_id: str, timeout_seconds: float) -> None:
        self.run_id = run_id
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Failed to complete run '{run_id}': timed out after {timeout_seconds:g}s"
        )


class AgentUnavailableError(ChangeEvalError):
    """Raised when the configured agent reports itself unavailable before execution."""

    def __init__(self, agent_type: str) -> None:
        self.agent_type = agent_type
        super().__init__(
            f"Failed to start agent: '{agent_type}' is not available on this host"
        )
