"""StructlogHookObserver — production observer that delegates to structlog."""

import structlog


class StructlogHookObserver:
    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def hook_started(self, name: str, phase: str) -> None:
        self._log.info("hook.started", hook=name, phase=phase)

    def hook_completed(self, name: str, phase: str, duration_ms: int) -> None:
        self._log.info(
            "hook.completed", hook=name, phase=phase, duration_ms=duration_ms
        )

    def hook_failed(self, name: str, phase: str, reason: str) -> None:
        self._log.error("hook.failed", hook=name, phase=phase, reason=reason)
