"""CLI entrypoint for change-eval — typer app with `run` and `validate` commands."""

import asyncio
import sys
from datetime import datetime
from pathlib import Path

import structlog
import typer
from rich.console import Console
from rich.table import Table

from change_eval.agent.infrastructure.observer import StructlogAgentObserver
from change_eval.agent.infrastructure.registry import create_agent_adapter
from change_eval.config.domain.config import EvalConfig
from change_eval.config.infrastructure.observer import StructlogConfigObserver
from change_eval.config.infrastructure.yaml_loader import YamlConfigLoader
from change_eval.core.errors import ChangeEvalError
from change_eval.evaluation.application.orchestrator import Orchestrator
from change_eval.evaluation.domain.bundle import ResultsBundle
from change_eval.evaluation.domain.observer import EvaluationObserver
from change_eval.evaluation.domain.summary import OverallStatus
from change_eval.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from change_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from change_eval.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from change_eval.evaluator.infrastructure.registry import (
    EvaluatorRegistry,
    create_evaluator_registry,
)
from change_eval.hooks.domain.hook import Hook
from change_eval.hooks.infrastructure.observer import StructlogHookObserver
from change_eval.hooks.infrastructure.script import ScriptHook
from change_eval.judge.infrastructure.litellm import LiteLLMJudge
from change_eval.judge.infrastructure.observer import StructlogJudgeObserver
from change_eval.workspace.infrastructure.manager import WorkspaceManager
from change_eval.workspace.infrastructure.observer import StructlogWorkspaceObserver

app = typer.Typer(add_completion=False)

EXIT_CODES: dict[OverallStatus, int] = {
    OverallStatus.PASSED: 0,
    OverallStatus.FAILED: 1,
    OverallStatus.PARTIAL: 2,
}
EXIT_SETUP_ERROR = 3

_STATUS_STYLES = {
    "passed": "green",
    "failed": "red",
    "skipped": "yellow",
    "partial": "yellow",
}


def _configure_structlog(log_format: str) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=EXIT_SETUP_ERROR)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def exit_code_for(bundle: ResultsBundle) -> int:
    return EXIT_CODES[bundle.summary.overall_status]


def _output_stem(config_name: str, run_id: str) -> str:
    """Build the output file stem: {config_name}_{YYYYMMDD}_{run id suffix}."""
    date_str = datetime.now().strftime("%Y%m%d")
    short_id = run_id.rsplit("-", 1)[-1]
    return f"{config_name}_{date_str}_{short_id}"


def _build_registry(config: EvalConfig) -> EvaluatorRegistry:
    judge = (
        LiteLLMJudge(config=config.judge, observer=StructlogJudgeObserver())
        if config.judge is not None
        else None
    )
    return create_evaluator_registry(judge=judge)


def _build_hooks(config: EvalConfig) -> tuple[list[Hook], list[Hook]]:
    observer = StructlogHookObserver()
    pre: list[Hook] = [ScriptHook(h, observer) for h in config.hooks.pre_execution]
    post: list[Hook] = [ScriptHook(h, observer) for h in config.hooks.post_evaluation]
    return pre, post


def _print_summary(bundle: ResultsBundle, results_path: Path) -> None:
    console = Console()
    table = Table(title=f"change-eval · {bundle.run.name}", show_lines=False)
    table.add_column("Evaluator", style="bold")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Message", overflow="fold")
    for result in bundle.evaluators:
        style = _STATUS_STYLES.get(result.status.value, "default")
        table.add_row(
            result.evaluator,
            f"[{style}]{result.status.value}[/{style}]",
            f"{result.duration_ms / 1000:.1f}s",
            result.message,
        )
    console.print(table)

    summary = bundle.summary
    overall = summary.overall_status.value
    style = _STATUS_STYLES.get(overall, "default")
    console.print(
        f"Run [bold]{bundle.run.run_id}[/bold]  agent: {bundle.agent.status}  "
        f"evaluators: {summary.passed} passed, {summary.failed} failed, "
        f"{summary.skipped} skipped  overall: [{style}]{overall}[/{style}]"
    )
    console.print(f"Results: {results_path}")


@app.command()
def run(
    config_path: Path = typer.Argument(..., help="Path to evaluation config YAML"),
    output_dir: Path = typer.Option(
        Path("./results"),
        "--output-dir",
        "-o",
        help="Directory that receives a copy of the results bundle",
    ),
    log_format: str = typer.Option(
        "console",
        "--log-format",
        help="Log format: 'console' or 'json'",
    ),
    run_id: str | None = typer.Option(
        None, "--run-id", help="Reuse an explicit run id instead of generating one"
    ),
    keep_workspace: bool | None = typer.Option(
        None,
        "--keep-workspace/--no-keep-workspace",
        help="Override execution.keep_workspace from the config",
    ),
) -> None:
    """Run an agent against a repository and evaluate its change."""
    _configure_structlog(log_format=log_format)
    try:
        loader = YamlConfigLoader(observer=StructlogConfigObserver())
        config = loader.load(path=config_path)
        if keep_workspace is not None:
            config = config.model_copy(
                update={
                    "execution": config.execution.model_copy(
                        update={"keep_workspace": keep_workspace}
                    )
                }
            )

        observers: list[EvaluationObserver] = [StructlogEvaluationObserver()]
        if log_format != "json":
            observers.append(ProgressEvaluationObserver())
        pre_hooks, post_hooks = _build_hooks(config)

        orchestrator = Orchestrator(
            config=config,
            workspace_manager=WorkspaceManager(
                root=config.execution.workspace_root,
                observer=StructlogWorkspaceObserver(),
            ),
            evaluator_registry=_build_registry(config),
            agent=create_agent_adapter(config.agent, StructlogAgentObserver()),
            observer=CompositeEvaluationObserver(observers=observers),
            pre_execution_hooks=pre_hooks,
            post_evaluation_hooks=post_hooks,
            config_file=str(config_path),
        )
        bundle = asyncio.run(orchestrator.run(run_id=run_id))

        output_dir.mkdir(parents=True, exist_ok=True)
        out_path = output_dir / f"{_output_stem(config.name, bundle.run.run_id)}.json"
        out_path.write_text(bundle.model_dump_json(indent=2), encoding="utf-8")

        _print_summary(bundle=bundle, results_path=out_path)
        code = exit_code_for(bundle)

    except KeyboardInterrupt:
        typer.echo("Run interrupted.")
        sys.exit(EXIT_SETUP_ERROR)
    except ChangeEvalError as exc:
        typer.echo(str(exc))
        sys.exit(EXIT_SETUP_ERROR)
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")
        sys.exit(EXIT_SETUP_ERROR)

    raise typer.Exit(code=code)


@app.command()
def validate(
    config_path: Path = typer.Argument(..., help="Path to evaluation config YAML"),
) -> None:
    """Load a config and resolve its evaluators without running anything."""
    _configure_structlog(log_format="console")
    try:
        config = YamlConfigLoader(observer=StructlogConfigObserver()).load(
            path=config_path
        )
        registry = _build_registry(config)
        for spec in config.evaluators:
            registry.resolve(spec.name)
        create_agent_adapter(config.agent, StructlogAgentObserver())
    except ChangeEvalError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=EXIT_SETUP_ERROR) from exc

    typer.echo(
        f"OK: '{config.name}' with {len(config.evaluators)} evaluator(s):"
        f" {', '.join(s.name for s in config.evaluators)}"
    )


if __name__ == "__main__":
    app()
