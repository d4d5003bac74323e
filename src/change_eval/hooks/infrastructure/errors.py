"""Error types raised by hook infrastructure."""

from change_eval.core.errors import ChangeEvalError


class HookError(ChangeEvalError):
    """Raised when a lifecycle hook cannot start, exits non-zero, or times out."""

    def __init__(self, name: str, reason: str) -> None:
        self.hook_name = name
        self.reason = reason
        super().__init__(f"Failed to run hook '{name}': {reason}")
