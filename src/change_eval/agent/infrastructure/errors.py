"""Error types raised by agent infrastructure."""

from change_eval.core.errors import ChangeEvalError


class AgentInvocationError(ChangeEvalError):
    """Raised when the agent cannot be invoked at all."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to invoke agent: {reason}", retriable=retriable)


class AgentTypeNotSupportedError(ChangeEvalError):
    """Raised when the agent type specified in config is not a known agent type."""

    def __init__(self, agent_type: str) -> None:
        super().__init__(
            f"Failed to create agent adapter: unsupported agent type '{agent_type}'"
        )
