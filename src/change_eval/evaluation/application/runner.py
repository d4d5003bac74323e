"""EvaluatorRunner — concurrent, failure-isolated execution of configured evaluators."""

import asyncio
import time
import traceback
from typing import Literal, TypeAlias

from change_eval.config.domain.evaluator import EvaluatorSpec
from change_eval.evaluation.domain.observer import EvaluationObserver
from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.domain.evaluator import Evaluator
from change_eval.evaluator.domain.result import (
    EvaluationErrorDetail,
    EvaluationResult,
    EvaluationStatus,
)
from change_eval.evaluator.infrastructure.errors import (
    AssertionViolationError,
    PreconditionUnmetError,
)

ResolvedEvaluator: TypeAlias = tuple[EvaluatorSpec, Evaluator]

_MISSING_EXPECTED_REASON = "expected reference tree is not available"


class EvaluatorRunner:
    """Fans out every evaluator over one shared context and joins on all of them.

    Each evaluator's outcome is settled inside its own task, so no exception
    or timeout escapes to cancel its siblings. ``run`` never raises, apart
    from cancellation of the run itself.
    """

    def __init__(
        self,
        observer: EvaluationObserver,
        max_concurrent: int = 4,
        default_timeout_seconds: float = 300.0,
        timeout_status: Literal["skipped", "failed"] = "skipped",
    ) -> None:
        self._observer = observer
        self._max_concurrent = max_concurrent
        self._default_timeout_seconds = default_timeout_seconds
        self._timeout_status = EvaluationStatus(timeout_status)

    async def run(
        self,
        run_id: str,
        evaluators: list[ResolvedEvaluator],
        context: EvaluationContext,
    ) -> list[EvaluationResult]:
        """Return one result per evaluator, in the order given."""
        self._observer.evaluators_started(
            run_id=run_id, total=len(evaluators), max_concurrent=self._max_concurrent
        )
        started_at = time.monotonic()

        slots: list[EvaluationResult | None] = [None] * len(evaluators)
        sem = asyncio.Semaphore(self._max_concurrent)
        async with asyncio.TaskGroup() as tg:
            for index, (spec, evaluator) in enumerate(evaluators):
                tg.create_task(
                    self._run_one(
                        sem=sem,
                        run_id=run_id,
                        index=index,
                        spec=spec,
                        evaluator=evaluator,
                        context=context,
                        slots=slots,
                    )
                )

        results = [r for r in slots if r is not None]
        assert len(results) == len(evaluators)  # every task fills its own slot

        self._observer.evaluators_completed(
            run_id=run_id,
            total=len(results),
            elapsed_seconds=time.monotonic() - started_at,
        )
        return results

    async def _run_one(
        self,
        sem: asyncio.Semaphore,
        run_id: str,
        index: int,
        spec: EvaluatorSpec,
        evaluator: Evaluator,
        context: EvaluationContext,
        slots: list[EvaluationResult | None],
    ) -> None:
        async with sem:
            self._observer.evaluator_started(run_id=run_id, evaluator=spec.name)
            start = time.monotonic()
            result = await self._settle(run_id, spec, evaluator, context)
            duration_ms = int((time.monotonic() - start) * 1000)

        result = result.model_copy(
            update={"evaluator": spec.name, "duration_ms": duration_ms}
        )
        slots[index] = result
        self._observer.evaluator_completed(
            run_id=run_id,
            evaluator=spec.name,
            status=result.status.value,
            duration_ms=duration_ms,
        )

    async def _settle(
        self,
        run_id: str,
        spec: EvaluatorSpec,
        evaluator: Evaluator,
        context: EvaluationContext,
    ) -> EvaluationResult:
        """Turn every way an evaluator can end into an EvaluationResult."""
        if evaluator.requires_expected_reference and not context.has_expected:
            self._observer.evaluator_skipped(
                run_id=run_id, evaluator=spec.name, reason=_MISSING_EXPECTED_REASON
            )
            return _skipped(spec.name, _MISSING_EXPECTED_REASON)

        timeout_seconds = spec.timeout_seconds or self._default_timeout_seconds
        deadline = asyncio.timeout(timeout_seconds)
        try:
            async with deadline:
                if not await evaluator.check_preconditions(context):
                    reason = evaluator.precondition_message
                    self._observer.evaluator_skipped(
                        run_id=run_id, evaluator=spec.name, reason=reason
                    )
                    return _skipped(spec.name, reason)
                return await evaluator.evaluate(context)

        except AssertionViolationError as exc:
            return EvaluationResult(
                evaluator=spec.name,
                status=EvaluationStatus.FAILED,
                message=f"Violations: {'; '.join(exc.violations)}",
                metrics={"violations": len(exc.violations)},
                error=_error_detail(exc),
            )
        except PreconditionUnmetError as exc:
            self._observer.evaluator_skipped(
                run_id=run_id, evaluator=spec.name, reason=str(exc)
            )
            return _skipped(spec.name, str(exc))
        except TimeoutError as exc:
            if not deadline.expired():
                return self._errored(run_id, spec.name, exc)
            self._observer.evaluator_timed_out(
                run_id=run_id, evaluator=spec.name, timeout_seconds=timeout_seconds
            )
            return EvaluationResult(
                evaluator=spec.name,
                status=self._timeout_status,
                message=f"Evaluator timed out after {timeout_seconds:g}s",
                error=EvaluationErrorDetail(
                    message=f"timed out after {timeout_seconds:g}s",
                    error_type="timeout",
                ),
            )
        except Exception as exc:
            return self._errored(run_id, spec.name, exc)

    def _errored(self, run_id: str, name: str, exc: Exception) -> EvaluationResult:
        detail = _error_detail(exc)
        self._observer.evaluator_errored(
            run_id=run_id,
            evaluator=name,
            error_type=detail.error_type,
            reason=detail.message,
        )
        return EvaluationResult(
            evaluator=name,
            status=EvaluationStatus.SKIPPED,
            message=f"Evaluator error: {detail.message}",
            error=detail,
        )


def _skipped(name: str, reason: str) -> EvaluationResult:
    return EvaluationResult(
        evaluator=name,
        status=EvaluationStatus.SKIPPED,
        message=f"Precondition not met: {reason}",
    )


def _error_detail(exc: BaseException) -> EvaluationErrorDetail:
    return EvaluationErrorDetail(
        message=str(exc) or type(exc).__name__,
        error_type=type(exc).__name__,
        stack_trace="".join(traceback.format_exception(exc)),
    )
