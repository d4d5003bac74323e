"""Observer port for lifecycle hooks."""

from typing import Protocol


class HookObserver(Protocol):
    def hook_started(self, name: str, phase: str) -> None: ...

    def hook_completed(self, name: str, phase: str, duration_ms: int) -> None: ...

    def hook_failed(self, name: str, phase: str, reason: str) -> None: ...
