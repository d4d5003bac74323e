"""Observer port for config loading events."""

from typing import Protocol


class ConfigObserver(Protocol):
    def config_loaded(self, name: str, evaluator_names: list[str]) -> None: ...

    def config_judge_temperature_warning(self, temperature: float) -> None: ...
