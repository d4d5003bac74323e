"""Base exception class for all change-eval-specific errors."""


class ChangeEvalError(Exception):
    """Base class for all change-eval errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable
