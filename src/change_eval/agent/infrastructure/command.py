"""CommandAgentAdapter — drives any coding CLI as a subprocess in the modified tree."""

import asyncio
import os
import shutil
import signal
import time

from change_eval.agent.domain.log import (
    AgentInfo,
    ExecutionInfo,
    LogError,
    LogMessage,
    ModelInfo,
    StandardLog,
)
from change_eval.agent.domain.observer import AgentObserver
from change_eval.agent.domain.result import AgentExecutionContext, AgentExecutionResult
from change_eval.agent.infrastructure.environment import describe_environment, utc_now
from change_eval.agent.infrastructure.errors import AgentInvocationError
from change_eval.core.version import TOOL_VERSION

COMMAND_AGENT_TYPE = "command"
_PROMPT_PLACEHOLDER = "{prompt}"
_MODEL_PLACEHOLDER = "{model}"


class CommandAgentAdapter:
    """Runs ``command args...`` with ``{prompt}`` and ``{model}`` substituted into args.

    When no arg carries ``{prompt}`` the prompt is written to stdin. The child
    receives exactly ``context.env``.
    """

    def __init__(self, command: str, args: list[str], observer: AgentObserver) -> None:
        self._command = command
        self._args = args
        self._observer = observer

    @property
    def name(self) -> str:
        return COMMAND_AGENT_TYPE

    @property
    def version(self) -> str:
        return TOOL_VERSION

    async def check_availability(self) -> bool:
        return shutil.which(self._command) is not None

    def build_argv(self, prompt: str, model: str | None) -> list[str]:
        return [
            self._command,
            *(
                arg.replace(_PROMPT_PLACEHOLDER, prompt).replace(
                    _MODEL_PLACEHOLDER, model or ""
                )
                for arg in self._args
            ),
        ]

    async def execute(self, context: AgentExecutionContext) -> AgentExecutionResult:
        """
        Raises:
            AgentInvocationError: if the command cannot be started.
        """
        self._observer.agent_execution_started(
            adapter=self.name, working_dir=str(context.repo_dir)
        )
        argv = self.build_argv(context.prompt, context.model)
        prompt_via_stdin = not any(_PROMPT_PLACEHOLDER in a for a in self._args)

        started_at = utc_now()
        start = time.monotonic()
        try:
            proc = await asyncio.create_subprocess_exec(
                *argv,
                cwd=context.repo_dir,
                env=dict(context.env),
                stdin=asyncio.subprocess.PIPE
                if prompt_via_stdin
                else asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                start_new_session=True,
            )
        except OSError as exc:
            self._observer.agent_execution_failed(adapter=self.name, reason=str(exc))
            raise AgentInvocationError(reason=f"cannot start {argv[0]}: {exc}") from exc

        errors: list[str] = []
        stdin_data = context.prompt.encode("utf-8") if prompt_via_stdin else None
        try:
            async with asyncio.timeout(context.timeout_seconds):
                stdout, _ = await proc.communicate(stdin_data)
        except TimeoutError:
            _kill_process_group(proc.pid)
            stdout, _ = await proc.communicate()
            status = "timeout"
            errors.append(f"agent timed out after {context.timeout_seconds:g}s")
        except asyncio.CancelledError:
            if proc.returncode is None:
                _kill_process_group(proc.pid)
                await proc.wait()
            raise
        else:
            status = "success" if proc.returncode == 0 else "failed"
            if proc.returncode != 0:
                errors.append(f"agent exited with code {proc.returncode}")

        exit_code = proc.returncode if proc.returncode is not None else -1
        duration_ms = int((time.monotonic() - start) * 1000)
        self._observer.agent_execution_completed(
            adapter=self.name,
            status=status,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )
        return AgentExecutionResult(
            status=status,
            exit_code=exit_code,
            output=(stdout or b"").decode("utf-8", errors="replace"),
            started_at=started_at,
            completed_at=utc_now(),
            duration_ms=duration_ms,
            errors=errors,
            details={
                "prompt": context.prompt,
                "model": context.model or "",
                "working_directory": str(context.repo_dir),
            },
        )

    def normalize_log(self, output: str, result: AgentExecutionResult) -> StandardLog:
        messages = [
            LogMessage(
                role="user",
                content=str(result.details.get("prompt", "")),
                timestamp=result.started_at,
            )
        ]
        if output:
            messages.append(
                LogMessage(role="assistant", content=output, timestamp=result.completed_at)
            )
        return StandardLog(
            agent=AgentInfo(
                name=self._command, version="unknown", adapter_version=TOOL_VERSION
            ),
            model=ModelInfo(
                name=str(result.details.get("model") or "unknown"), provider="unknown"
            ),
            execution=ExecutionInfo(
                started_at=result.started_at,
                completed_at=result.completed_at,
                duration_ms=result.duration_ms,
                exit_code=result.exit_code,
                status=result.status,
            ),
            messages=messages,
            errors=[
                LogError(message=e, timestamp=result.completed_at) for e in result.errors
            ],
            environment=describe_environment(
                str(result.details.get("working_directory", ""))
            ),
        )


def _kill_process_group(pid: int) -> None:
    """Kill the agent and anything it spawned; it leads its own session."""
    try:
        os.killpg(pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
