"""StructlogConfigObserver — production observer that delegates to structlog."""

import structlog


class StructlogConfigObserver:
    """Logs config domain events to structlog."""

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def config_loaded(self, name: str, evaluator_names: list[str]) -> None:
        self._log.info("config.loaded", name=name, evaluators=evaluator_names)

    def config_judge_temperature_warning(self, temperature: float) -> None:
        self._log.warning(
            "config.judge_temperature_nonzero",
            temperature=temperature,
            hint="judge verdicts are not reproducible above 0.0",
        )
