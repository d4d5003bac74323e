"""Error types raised by evaluators and the evaluator registry."""

from change_eval.core.errors import ChangeEvalError


class EvaluationError(ChangeEvalError):
    """Raised when an evaluator cannot finish scoring. Contained by the runner."""

    def __init__(self, evaluator: str, reason: str) -> None:
        self.evaluator = evaluator
        super().__init__(f"Failed to evaluate with '{evaluator}': {reason}")


class AssertionViolationError(EvaluationError):
    """Raised by an evaluator to report explicit assertion failures; becomes 'failed'."""

    def __init__(self, evaluator: str, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(evaluator, "; ".join(violations))


class EvaluatorConfigError(EvaluationError):
    """Raised when an evaluator's own config section is invalid."""

    def __init__(self, evaluator: str, reason: str) -> None:
        super().__init__(evaluator, f"invalid config: {reason}")


class PreconditionUnmetError(EvaluationError):
    """Marks an evaluator whose inputs are not available; becomes 'skipped'."""


class UnknownEvaluatorError(ChangeEvalError):
    """Raised at startup when a configured evaluator name has no registered factory."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        super().__init__(
            f"Failed to resolve evaluator: unknown evaluator '{name}'"
            f" (known: {', '.join(known)})"
        )
