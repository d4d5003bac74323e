"""Error types raised by judge infrastructure."""

from change_eval.core.errors import ChangeEvalError


class JudgeInvocationError(ChangeEvalError):
    """Raised when the LLM judge call fails or returns an unparseable response."""

    def __init__(self, reason: str, retriable: bool = False) -> None:
        super().__init__(f"Failed to invoke judge: {reason}", retriable=retriable)
