"""Explicit environment maps for subprocess invocations.

Subprocesses never inherit the host environment wholesale. Callers name the
variables they want copied from the host and supply any extra values; the
result is the complete environment handed to the child process.
"""

import os
from collections.abc import Iterable, Mapping

# Minimal set of host variables git needs to locate itself and its config.
GIT_PASSTHROUGH: tuple[str, ...] = ("PATH", "HOME", "SYSTEMROOT", "TMPDIR", "LANG")


def build_subprocess_env(
    passthrough: Iterable[str],
    extra: Mapping[str, str] | None = None,
    source: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Return an environment containing only the named host variables plus extras.

    Names missing from the source environment are silently left out. Extras
    override passed-through values.
    """
    host = os.environ if source is None else source
    env = {name: host[name] for name in passthrough if name in host}
    if extra:
        env.update(extra)
    return env


def git_env(source: Mapping[str, str] | None = None) -> dict[str, str]:
    """Environment for non-interactive git invocations."""
    return build_subprocess_env(
        passthrough=GIT_PASSTHROUGH,
        extra={"GIT_TERMINAL_PROMPT": "0"},
        source=source,
    )
