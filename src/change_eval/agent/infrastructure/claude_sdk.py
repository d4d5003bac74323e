"""ClaudeAgentSDKAdapter — drives Claude Code through the Claude Agent SDK."""

import asyncio
import shutil
import time
from typing import Any

from claude_agent_sdk import CLINotFoundError, query
from claude_agent_sdk.types import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
    ToolUseBlock,
)

from change_eval.agent.domain.log import (
    AgentInfo,
    ExecutionInfo,
    LogError,
    LogMessage,
    ModelInfo,
    StandardLog,
    UsageInfo,
)
from change_eval.agent.domain.observer import AgentObserver
from change_eval.agent.domain.result import AgentExecutionContext, AgentExecutionResult
from change_eval.agent.infrastructure.environment import describe_environment, utc_now
from change_eval.agent.infrastructure.errors import AgentInvocationError
from change_eval.core.version import TOOL_VERSION

CLAUDE_SDK_AGENT_TYPE = "claude_code_sdk"
_DEFAULT_MODEL = "claude-sonnet-4-5"


class ClaudeAgentSDKAdapter:
    """Runs one Claude Code session with its working directory set to the modified tree.

    The session is fully permissive inside that directory; isolation beyond
    the workspace is the caller's concern.
    """

    def __init__(self, model: str | None, observer: AgentObserver) -> None:
        self._model = model or _DEFAULT_MODEL
        self._observer = observer

    @property
    def name(self) -> str:
        return CLAUDE_SDK_AGENT_TYPE

    @property
    def version(self) -> str:
        return TOOL_VERSION

    async def check_availability(self) -> bool:
        return shutil.which("claude") is not None

    async def execute(self, context: AgentExecutionContext) -> AgentExecutionResult:
        """Run the prompt against ``context.repo_dir``.

        Agent errors and timeouts are reported in the result status.

        Raises:
            AgentInvocationError: if the Claude Code CLI cannot be found.
        """
        self._observer.agent_execution_started(
            adapter=self.name, working_dir=str(context.repo_dir)
        )
        options = ClaudeAgentOptions(
            model=context.model or self._model,
            cwd=str(context.repo_dir),
            env=dict(context.env),
            permission_mode="bypassPermissions",
            setting_sources=[],
        )

        started_at = utc_now()
        start = time.monotonic()
        messages: list[dict[str, str]] = [
            {"role": "user", "content": context.prompt, "timestamp": started_at}
        ]
        errors: list[str] = []
        result_message: ResultMessage | None = None
        status = "success"

        try:
            async with asyncio.timeout(context.timeout_seconds):
                async for message in query(prompt=context.prompt, options=options):
                    if isinstance(message, ResultMessage):
                        result_message = message
                    elif isinstance(message, AssistantMessage):
                        messages.extend(_assistant_entries(message))
        except CLINotFoundError as exc:
            self._observer.agent_execution_failed(adapter=self.name, reason=str(exc))
            raise AgentInvocationError(reason=str(exc)) from exc
        except TimeoutError:
            status = "timeout"
            errors.append(f"agent timed out after {context.timeout_seconds:g}s")
        except Exception as exc:
            # The SDK raises bare Exceptions when its subprocess dies.
            status = "failed"
            errors.append(str(exc))

        if status == "success":
            if result_message is None:
                status = "failed"
                errors.append("no ResultMessage in response stream")
            elif result_message.is_error:
                status = "failed"
                errors.append(f"agent returned error response: {result_message.result}")

        duration_ms = int((time.monotonic() - start) * 1000)
        exit_code = 0 if status == "success" else 1
        self._observer.agent_execution_completed(
            adapter=self.name,
            status=status,
            exit_code=exit_code,
            duration_ms=duration_ms,
        )
        return AgentExecutionResult(
            status=status,
            exit_code=exit_code,
            output=(result_message.result or "") if result_message else "",
            started_at=started_at,
            completed_at=utc_now(),
            duration_ms=duration_ms,
            errors=errors,
            details={
                "model": context.model or self._model,
                "working_directory": str(context.repo_dir),
                "messages": messages,
                "usage": _usage(result_message),
            },
        )

    def normalize_log(self, output: str, result: AgentExecutionResult) -> StandardLog:
        messages = [LogMessage(**m) for m in result.details.get("messages", [])]
        if output and not any(
            m.role == "assistant" and m.content == output for m in messages
        ):
            messages.append(
                LogMessage(role="assistant", content=output, timestamp=result.completed_at)
            )
        return StandardLog(
            agent=AgentInfo(
                name=self.name, version=self.version, adapter_version=TOOL_VERSION
            ),
            model=ModelInfo(
                name=str(result.details.get("model", self._model)),
                provider="anthropic",
            ),
            execution=ExecutionInfo(
                started_at=result.started_at,
                completed_at=result.completed_at,
                duration_ms=result.duration_ms,
                exit_code=result.exit_code,
                status=result.status,
            ),
            messages=messages,
            usage=UsageInfo(**result.details.get("usage", {})),
            errors=[
                LogError(message=e, timestamp=result.completed_at) for e in result.errors
            ],
            environment=describe_environment(
                str(result.details.get("working_directory", ""))
            ),
        )


def _assistant_entries(message: AssistantMessage) -> list[dict[str, str]]:
    now = utc_now()
    entries: list[dict[str, str]] = []
    text = "".join(b.text for b in message.content if isinstance(b, TextBlock))
    if text:
        entries.append({"role": "assistant", "content": text, "timestamp": now})
    for block in message.content:
        if isinstance(block, ToolUseBlock):
            entries.append(
                {"role": "tool", "content": f"tool_use: {block.name}", "timestamp": now}
            )
    return entries


def _usage(result_message: ResultMessage | None) -> dict[str, Any]:
    if result_message is None:
        return {}
    raw = result_message.usage or {}
    prompt_tokens = int(raw.get("input_tokens") or 0)
    completion_tokens = int(raw.get("output_tokens") or 0)
    return {
        "prompt_tokens": prompt_tokens,
        "completion_tokens": completion_tokens,
        "total_tokens": prompt_tokens + completion_tokens,
        "estimated_cost_usd": result_message.total_cost_usd,
    }
