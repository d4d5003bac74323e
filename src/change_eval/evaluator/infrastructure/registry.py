"""EvaluatorRegistry — maps configured evaluator names to evaluator factories."""

from collections.abc import Callable
from typing import TypeAlias

from change_eval.config.domain.evaluator import JUDGE_EVALUATOR_NAME, is_judge_evaluator
from change_eval.evaluator.domain.evaluator import Evaluator
from change_eval.evaluator.infrastructure.errors import UnknownEvaluatorError
from change_eval.evaluator.infrastructure.expected_diff import (
    EXPECTED_DIFF_EVALUATOR_NAME,
    ExpectedDiffEvaluator,
)
from change_eval.evaluator.infrastructure.git_diff import (
    GIT_DIFF_EVALUATOR_NAME,
    GitDiffEvaluator,
)
from change_eval.evaluator.infrastructure.judge import JudgeEvaluator
from change_eval.judge.domain.judge import Judge

EvaluatorFactory: TypeAlias = Callable[[str], Evaluator]
NameMatcher: TypeAlias = Callable[[str], bool]


class EvaluatorRegistry:
    """Exact names are checked first, then name families in registration order."""

    def __init__(self) -> None:
        self._exact: dict[str, EvaluatorFactory] = {}
        self._families: list[tuple[str, NameMatcher, EvaluatorFactory]] = []

    def register(self, name: str, factory: EvaluatorFactory) -> None:
        self._exact[name] = factory

    def register_family(
        self, label: str, matcher: NameMatcher, factory: EvaluatorFactory
    ) -> None:
        self._families.append((label, matcher, factory))

    @property
    def known_names(self) -> list[str]:
        return sorted(self._exact) + [label for label, _, _ in self._families]

    def resolve(self, name: str) -> Evaluator:
        """
        Raises:
            UnknownEvaluatorError: if no exact name or family matches.
        """
        factory = self._exact.get(name)
        if factory is None:
            for _, matcher, family_factory in self._families:
                if matcher(name):
                    factory = family_factory
                    break
        if factory is None:
            raise UnknownEvaluatorError(name=name, known=self.known_names)
        return factory(name)


def create_evaluator_registry(judge: Judge | None) -> EvaluatorRegistry:
    """Registry with the built-in evaluators; judge evaluators only when a judge exists."""
    registry = EvaluatorRegistry()
    registry.register(GIT_DIFF_EVALUATOR_NAME, lambda name: GitDiffEvaluator(name))
    registry.register(
        EXPECTED_DIFF_EVALUATOR_NAME, lambda name: ExpectedDiffEvaluator(name)
    )
    if judge is not None:
        registry.register_family(
            f"{JUDGE_EVALUATOR_NAME}[-:*]",
            is_judge_evaluator,
            lambda name: JudgeEvaluator(name=name, judge=judge),
        )
    return registry
