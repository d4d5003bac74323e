"""Agent adapter registry — maps AgentConfig.type to an adapter factory."""

from collections.abc import Callable
from typing import TypeAlias

from change_eval.agent.domain.adapter import AgentAdapter
from change_eval.agent.domain.observer import AgentObserver
from change_eval.agent.infrastructure.claude_sdk import (
    CLAUDE_SDK_AGENT_TYPE,
    ClaudeAgentSDKAdapter,
)
from change_eval.agent.infrastructure.command import (
    COMMAND_AGENT_TYPE,
    CommandAgentAdapter,
)
from change_eval.agent.infrastructure.errors import AgentTypeNotSupportedError
from change_eval.config.domain.agent import AgentConfig

AdapterFactory: TypeAlias = Callable[[AgentConfig, AgentObserver], AgentAdapter]

_ADAPTERS: dict[str, AdapterFactory] = {
    CLAUDE_SDK_AGENT_TYPE: lambda config, observer: ClaudeAgentSDKAdapter(
        model=config.model, observer=observer
    ),
    COMMAND_AGENT_TYPE: lambda config, observer: CommandAgentAdapter(
        command=config.command or "", args=config.args, observer=observer
    ),
}


def supported_agent_types() -> list[str]:
    return sorted(_ADAPTERS)


def create_agent_adapter(config: AgentConfig, observer: AgentObserver) -> AgentAdapter:
    """Return the AgentAdapter for the given AgentConfig.

    Raises:
        AgentTypeNotSupportedError: if config.type is not a known agent type.
    """
    factory = _ADAPTERS.get(config.type)
    if factory is None:
        raise AgentTypeNotSupportedError(agent_type=config.type)
    return factory(config, observer)
