"""YAML config loader — parses, interpolates env vars, validates, and emits observer events."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from change_eval.config.domain.config import EvalConfig
from change_eval.config.domain.evaluator import is_judge_evaluator
from change_eval.config.domain.observer import ConfigObserver
from change_eval.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from change_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns an EvalConfig from a YAML file."""

    def __init__(
        self,
        observer: ConfigObserver,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._observer = observer
        self._environ = environ

    def load(self, path: Path) -> EvalConfig:
        """
        Load, interpolate, validate, and return an EvalConfig from a YAML file.

        Raises:
            ConfigLoadError: if the file is missing, unreadable, or not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if the schema is violated, evaluator names repeat,
                or a judge evaluator is configured without a judge section.
        """
        raw = _parse_yaml(path=path)
        missing = collect_missing_vars(raw, self._environ)
        if missing:
            raise MissingEnvVarsError(missing)
        interpolated = interpolate(raw, self._environ)
        cfg = _build_config(resolved=interpolated)
        _check_semantics(cfg=cfg)
        if cfg.judge is not None and cfg.judge.temperature > 0.0:
            self._observer.config_judge_temperature_warning(cfg.judge.temperature)
        self._observer.config_loaded(
            name=cfg.name,
            evaluator_names=[spec.name for spec in cfg.evaluators],
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except OSError as exc:
        raise ConfigLoadError(
            path=path, reason=f"cannot read file ({exc.strerror})"
        ) from exc
    except UnicodeDecodeError as exc:
        raise ConfigLoadError(path=path, reason="file is not valid UTF-8") from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc
    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top-level document is not a mapping")
    return raw


def _build_config(resolved: Any) -> EvalConfig:
    try:
        return EvalConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _check_semantics(cfg: EvalConfig) -> None:
    """
    Raises:
        ConfigValidationError: listing ALL semantic problems before raising.
    """
    problems: list[str] = []

    seen: set[str] = set()
    for spec in cfg.evaluators:
        if spec.name in seen:
            problems.append(f"evaluator '{spec.name}' is configured more than once")
        seen.add(spec.name)

    judge_evaluators = [s.name for s in cfg.evaluators if is_judge_evaluator(s.name)]
    if judge_evaluators and cfg.judge is None:
        problems.append(
            f"evaluators {judge_evaluators} require a 'judge' section"
        )

    if cfg.agent.type == "command" and not cfg.agent.command:
        problems.append("agent type 'command' requires 'agent.command'")

    if problems:
        raise ConfigValidationError("; ".join(problems))
