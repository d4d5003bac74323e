"""Per-evaluator config parsing."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from change_eval.evaluator.infrastructure.errors import EvaluatorConfigError

T = TypeVar("T", bound=BaseModel)


def parse_evaluator_config(
    evaluator: str, model: type[T], raw: dict[str, Any]
) -> T:
    """
    Raises:
        EvaluatorConfigError: if ``raw`` does not validate against ``model``.
    """
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise EvaluatorConfigError(evaluator, str(exc)) from exc
