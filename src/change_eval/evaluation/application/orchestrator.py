"""Orchestrator — drives one run from workspace setup to the persisted results bundle."""

import asyncio
import platform
import sys
import time
from pathlib import Path

from change_eval.agent.domain.adapter import AgentAdapter
from change_eval.agent.domain.result import AgentExecutionContext
from change_eval.agent.infrastructure.environment import utc_now
from change_eval.config.domain.config import EvalConfig
from change_eval.core.env import build_subprocess_env
from change_eval.core.errors import ChangeEvalError
from change_eval.core.version import TOOL_VERSION
from change_eval.evaluation.application.runner import EvaluatorRunner, ResolvedEvaluator
from change_eval.evaluation.domain.bundle import (
    AgentOutcome,
    BundleArtifacts,
    ResultsBundle,
    RunEnvironment,
    RunMetadata,
)
from change_eval.evaluation.domain.observer import EvaluationObserver
from change_eval.evaluation.domain.summary import summarize
from change_eval.evaluation.infrastructure import storage
from change_eval.evaluation.infrastructure.errors import (
    AgentUnavailableError,
    RunTimeoutError,
)
from change_eval.evaluator.domain.context import EvaluationContext
from change_eval.evaluator.infrastructure.registry import EvaluatorRegistry
from change_eval.hooks.domain.hook import Hook, HookContext, HookPhase
from change_eval.hooks.infrastructure.errors import HookError
from change_eval.workspace.domain.workspace import RepoRef, Workspace
from change_eval.workspace.infrastructure.manager import WorkspaceManager


class Orchestrator:
    """Runs the full pipeline for one EvalConfig.

    Setup-phase failures (workspace, clone, pre-execution hooks, agent
    availability) abort the run. Evaluation-phase failures are contained per
    evaluator by the runner. The workspace lease is released on every path.
    """

    def __init__(
        self,
        config: EvalConfig,
        workspace_manager: WorkspaceManager,
        evaluator_registry: EvaluatorRegistry,
        agent: AgentAdapter,
        observer: EvaluationObserver,
        pre_execution_hooks: list[Hook] | None = None,
        post_evaluation_hooks: list[Hook] | None = None,
        config_file: str | None = None,
    ) -> None:
        self._config = config
        self._workspaces = workspace_manager
        self._registry = evaluator_registry
        self._agent = agent
        self._observer = observer
        self._pre_hooks = pre_execution_hooks or []
        self._post_hooks = post_evaluation_hooks or []
        self._config_file = config_file

    def resolve_evaluators(self) -> list[ResolvedEvaluator]:
        """
        Raises:
            UnknownEvaluatorError: for the first configured name with no factory.
        """
        return [
            (spec, self._registry.resolve(spec.name))
            for spec in self._config.evaluators
        ]

    async def run(self, run_id: str | None = None) -> ResultsBundle:
        """Execute the run and return the persisted ResultsBundle.

        Raises:
            UnknownEvaluatorError: before any workspace is created.
            SetupError: if the workspace cannot be created, locked, or materialized.
            HookError: if a pre-execution hook fails.
            AgentUnavailableError: if the agent reports itself unavailable.
            AgentInvocationError: if the agent cannot be started.
            RunTimeoutError: if the run exceeds ``execution.run_timeout_seconds``.
        """
        resolved = self.resolve_evaluators()
        execution = self._config.execution
        started_at = utc_now()
        start = time.monotonic()

        async with self._workspaces.lease(
            name=self._config.name,
            run_id=run_id,
            repo=self._config.repo,
            keep=execution.keep_workspace,
        ) as workspace:
            self._observer.run_started(
                run_id=workspace.run_id,
                name=self._config.name,
                evaluator_names=[spec.name for spec, _ in resolved],
            )
            deadline = asyncio.timeout(execution.run_timeout_seconds)
            try:
                async with deadline:
                    bundle = await self._run_in(workspace, resolved, started_at, start)
            except TimeoutError as exc:
                if not deadline.expired():
                    raise
                error = RunTimeoutError(
                    run_id=workspace.run_id,
                    timeout_seconds=execution.run_timeout_seconds or 0.0,
                )
                self._observer.run_failed(run_id=workspace.run_id, reason=str(error))
                raise error from exc
            except ChangeEvalError as exc:
                self._observer.run_failed(run_id=workspace.run_id, reason=str(exc))
                raise

        self._observer.run_completed(
            run_id=bundle.run.run_id,
            overall_status=bundle.summary.overall_status.value,
            elapsed_seconds=time.monotonic() - start,
        )
        return bundle

    async def _run_in(
        self,
        workspace: Workspace,
        resolved: list[ResolvedEvaluator],
        started_at: str,
        start: float,
    ) -> ResultsBundle:
        cfg = self._config
        execution = cfg.execution

        workspace = await self._workspaces.materialize_modified(
            workspace,
            RepoRef(repo=cfg.repo, branch=cfg.branch, commit=cfg.commit),
            timeout=execution.clone_timeout_seconds,
        )
        if cfg.has_expected_reference:
            workspace = await self._workspaces.materialize_expected(
                workspace,
                RepoRef(repo=cfg.repo, branch=cfg.expected, commit=cfg.expected_commit),
                timeout=execution.clone_timeout_seconds,
            )

        for hook in self._pre_hooks:
            await hook.run(self._hook_context(workspace, HookPhase.PRE_EXECUTION))

        if not await self._agent.check_availability():
            raise AgentUnavailableError(agent_type=cfg.agent.type)

        agent_result = await self._agent.execute(
            AgentExecutionContext(
                workspace_dir=workspace.paths.run_dir,
                repo_dir=workspace.modified_dir,
                artifacts_dir=workspace.artifacts_dir,
                prompt=cfg.agent.prompt,
                model=cfg.agent.model,
                timeout_seconds=execution.agent_timeout_seconds,
                env=build_subprocess_env(
                    passthrough=cfg.agent.env_passthrough, extra=cfg.agent.env
                ),
            )
        )
        agent_log = self._agent.normalize_log(agent_result.output, agent_result)
        self._observer.agent_finished(
            run_id=workspace.run_id,
            agent_type=cfg.agent.type,
            status=agent_result.status,
            duration_ms=agent_result.duration_ms,
        )
        log_path = await asyncio.to_thread(
            storage.save_agent_log, workspace.artifacts_dir, agent_log
        )

        context = EvaluationContext(
            modified_dir=workspace.modified_dir,
            expected_dir=workspace.expected_dir,
            artifacts_dir=workspace.artifacts_dir,
            evaluator_artifacts_dir=workspace.paths.evaluator_artifacts_dir,
            base_commit=workspace.modified_commit,
            agent_log=agent_log,
            evaluator_configs={spec.name: spec.config for spec, _ in resolved},
        )
        runner = EvaluatorRunner(
            observer=self._observer,
            max_concurrent=execution.max_concurrent_evaluators,
            default_timeout_seconds=execution.evaluator_timeout_seconds,
            timeout_status=execution.timeout_status,
        )
        results = await runner.run(workspace.run_id, resolved, context)

        bundle = ResultsBundle(
            run=RunMetadata(
                run_id=workspace.run_id,
                name=cfg.name,
                description=cfg.description,
                config_file=self._config_file,
                config_hash=storage.config_hash(cfg),
                repo=cfg.repo,
                branch=cfg.branch,
                commit=workspace.modified_commit,
                expected_branch=workspace.expected_branch,
                expected_commit=workspace.expected_commit,
                started_at=started_at,
                completed_at=utc_now(),
                duration_ms=int((time.monotonic() - start) * 1000),
                tool_version=TOOL_VERSION,
                environment=RunEnvironment(
                    os=f"{platform.system()} {platform.release()}".strip(),
                    python_version=sys.version.split()[0],
                    workspace_dir=str(workspace.paths.run_dir),
                ),
            ),
            agent=AgentOutcome(
                type=cfg.agent.type,
                status=agent_result.status,
                exit_code=agent_result.exit_code,
                duration_ms=agent_result.duration_ms,
                log_path=log_path.relative_to(workspace.artifacts_dir).as_posix(),
            ),
            evaluators=results,
            summary=summarize(results),
            artifacts=BundleArtifacts(
                agent_log=storage.AGENT_LOG_FILE_NAME,
                evaluator_artifacts=storage.list_evaluator_artifacts(
                    workspace.artifacts_dir
                ),
            ),
        )
        bundle_path = await asyncio.to_thread(
            storage.save_bundle, workspace.artifacts_dir, bundle
        )
        self._observer.bundle_saved(run_id=workspace.run_id, path=str(bundle_path))

        post_context = self._hook_context(
            workspace, HookPhase.POST_EVALUATION, results_path=bundle_path
        )
        for hook in self._post_hooks:
            try:
                await hook.run(post_context)
            except HookError:
                # Already reported through the hook observer; the bundle is final.
                continue
        return bundle

    def _hook_context(
        self,
        workspace: Workspace,
        phase: HookPhase,
        results_path: Path | None = None,
    ) -> HookContext:
        return HookContext(
            run_id=workspace.run_id,
            phase=phase,
            modified_dir=workspace.modified_dir,
            artifacts_dir=workspace.artifacts_dir,
            results_path=results_path,
        )
