"""Run id derivation — human name or timestamp plus a short random hash."""

import re
import secrets
from datetime import datetime

_MAX_NAME_LENGTH = 100
_DEFAULT_NAME = "workspace"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_name(name: str) -> str:
    """Make a human name safe for use as a directory name.

    Whitespace becomes '-', anything outside [A-Za-z0-9._-] is dropped, leading
    non-alphanumerics are stripped, and the result is capped at 100 chars.
    Falls back to 'workspace' when nothing usable remains.
    """
    cleaned = _UNSAFE_CHARS.sub("", _WHITESPACE.sub("-", name.strip()))
    cleaned = cleaned.lstrip("._-")[:_MAX_NAME_LENGTH]
    return cleaned or _DEFAULT_NAME


def make_run_id(name: str | None = None, now: datetime | None = None) -> str:
    """Return '<name-or-run>-<YYYYMMDD-HHMMSS>-<6 hex chars>'."""
    stamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    prefix = sanitize_name(name) if name else "run"
    return f"{prefix}-{stamp}-{secrets.token_hex(3)}"
