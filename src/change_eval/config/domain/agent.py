"""Agent configuration model."""

from pydantic import BaseModel, Field


class AgentConfig(BaseModel, frozen=True):
    """Which agent adapter drives the change, and what it is asked to do.

    ``env`` is passed to the agent process verbatim; ``env_passthrough`` names
    host variables copied into that environment. Nothing else is inherited.
    """

    type: str = Field(min_length=1)
    prompt: str = Field(min_length=1)
    model: str | None = None
    command: str | None = None
    args: list[str] = Field(default_factory=list)
    env: dict[str, str] = Field(default_factory=dict)
    env_passthrough: list[str] = Field(default_factory=lambda: ["PATH", "HOME"])
