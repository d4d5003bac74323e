"""Recursive ${ENV_VAR} interpolation for raw config data."""

import os
import re
from collections.abc import Mapping
from typing import TypeAlias

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

RawValue: TypeAlias = (
    str | int | float | bool | None | list["RawValue"] | dict[str, "RawValue"]
)


def collect_missing_vars(
    data: RawValue, environ: Mapping[str, str] | None = None
) -> list[str]:
    """Return every referenced variable name absent from ``environ``, in first-seen order."""
    env = os.environ if environ is None else environ
    missing: list[str] = []
    _collect(data, env, missing)
    return missing


def _collect(data: RawValue, env: Mapping[str, str], missing: list[str]) -> None:
    if isinstance(data, str):
        for match in _ENV_VAR_PATTERN.finditer(data):
            var_name = match.group(1)
            if var_name not in env and var_name not in missing:
                missing.append(var_name)
    elif isinstance(data, list):
        for item in data:
            _collect(item, env, missing)
    elif isinstance(data, dict):
        for value in data.values():
            _collect(value, env, missing)


def interpolate(data: RawValue, environ: Mapping[str, str] | None = None) -> RawValue:
    """
    Substitute all ${ENV_VAR} occurrences with their values from ``environ``.

    Call `collect_missing_vars` first; a missing variable raises KeyError here.
    """
    env = os.environ if environ is None else environ
    if isinstance(data, str):
        return _ENV_VAR_PATTERN.sub(lambda m: env[m.group(1)], data)
    if isinstance(data, list):
        return [interpolate(item, env) for item in data]
    if isinstance(data, dict):
        return {key: interpolate(value, env) for key, value in data.items()}
    return data
