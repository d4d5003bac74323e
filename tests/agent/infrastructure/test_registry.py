"""Tests for the agent adapter registry."""

import pytest

from change_eval.agent.infrastructure.claude_sdk import ClaudeAgentSDKAdapter
from change_eval.agent.infrastructure.command import CommandAgentAdapter
from change_eval.agent.infrastructure.errors import AgentTypeNotSupportedError
from change_eval.agent.infrastructure.registry import (
    create_agent_adapter,
    supported_agent_types,
)
from change_eval.config.domain.agent import AgentConfig
from tests.agent.fake_observer import FakeAgentObserver


class TestCreateAgentAdapter:
    def test_claude_sdk_type(self) -> None:
        adapter = create_agent_adapter(
            AgentConfig(type="claude_code_sdk", prompt="p"), FakeAgentObserver()
        )

        assert isinstance(adapter, ClaudeAgentSDKAdapter)

    def test_command_type(self) -> None:
        adapter = create_agent_adapter(
            AgentConfig(type="command", prompt="p", command="aider", args=["{prompt}"]),
            FakeAgentObserver(),
        )

        assert isinstance(adapter, CommandAgentAdapter)
        assert adapter.build_argv("x", None) == ["aider", "x"]

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(AgentTypeNotSupportedError, match="'cursor'"):
            create_agent_adapter(AgentConfig(type="cursor", prompt="p"), FakeAgentObserver())

    def test_supported_types(self) -> None:
        assert supported_agent_types() == ["claude_code_sdk", "command"]
