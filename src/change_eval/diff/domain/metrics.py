"""Change-scope metrics and change entropy over a working tree's change set."""

import math

from pydantic import BaseModel, ConfigDict, Field


class FileChange(BaseModel, frozen=True):
    """Line counts for one changed path. Binary files report zero lines."""

    path: str
    lines_added: int = Field(ge=0)
    lines_removed: int = Field(ge=0)
    binary: bool = False

    @property
    def changes(self) -> int:
        return self.lines_added + self.lines_removed


class ChangeMetrics(BaseModel, frozen=True):
    files_changed: int = Field(ge=0)
    lines_added: int = Field(ge=0)
    lines_removed: int = Field(ge=0)
    total_changes: int = Field(ge=0)
    change_entropy: float = Field(ge=0.0, le=1.0)
    files: list[FileChange] = Field(default_factory=list)


class GitDiffAssertions(BaseModel, frozen=True):
    """Optional numeric thresholds; unset fields are not checked."""

    model_config = ConfigDict(extra="forbid")

    max_files_changed: int | None = Field(default=None, ge=0)
    max_lines_added: int | None = Field(default=None, ge=0)
    min_lines_added: int | None = Field(default=None, ge=0)
    max_lines_removed: int | None = Field(default=None, ge=0)
    min_lines_removed: int | None = Field(default=None, ge=0)
    max_total_changes: int | None = Field(default=None, ge=0)
    min_change_entropy: float | None = Field(default=None, ge=0.0, le=1.0)
    max_change_entropy: float | None = Field(default=None, ge=0.0, le=1.0)

    @property
    def is_empty(self) -> bool:
        return all(value is None for value in self.model_dump().values())


def change_entropy(changes_per_file: list[int]) -> float:
    """Normalized Shannon entropy of how line changes spread across files.

    0.0 when every change lands in one file (or there are none); 1.0 when
    changes are spread evenly. Files with zero line changes do not count.
    """
    counts = [c for c in changes_per_file if c > 0]
    total = sum(counts)
    if total == 0 or len(counts) < 2:
        return 0.0
    entropy = -sum((c / total) * math.log2(c / total) for c in counts)
    normalized = entropy / math.log2(len(counts))
    return min(1.0, max(0.0, normalized))


def compute_metrics(files: list[FileChange]) -> ChangeMetrics:
    lines_added = sum(f.lines_added for f in files)
    lines_removed = sum(f.lines_removed for f in files)
    return ChangeMetrics(
        files_changed=len(files),
        lines_added=lines_added,
        lines_removed=lines_removed,
        total_changes=lines_added + lines_removed,
        change_entropy=change_entropy([f.changes for f in files]),
        files=sorted(files, key=lambda f: f.path),
    )


def check_assertions(metrics: ChangeMetrics, assertions: GitDiffAssertions) -> list[str]:
    """Return one human-readable message per violated threshold, in a fixed order."""
    checks: list[tuple[str, float, float | None, bool]] = [
        ("files_changed", metrics.files_changed, assertions.max_files_changed, True),
        ("lines_added", metrics.lines_added, assertions.max_lines_added, True),
        ("lines_added", metrics.lines_added, assertions.min_lines_added, False),
        ("lines_removed", metrics.lines_removed, assertions.max_lines_removed, True),
        ("lines_removed", metrics.lines_removed, assertions.min_lines_removed, False),
        ("total_changes", metrics.total_changes, assertions.max_total_changes, True),
        (
            "change_entropy",
            metrics.change_entropy,
            assertions.min_change_entropy,
            False,
        ),
        (
            "change_entropy",
            metrics.change_entropy,
            assertions.max_change_entropy,
            True,
        ),
    ]

    violations: list[str] = []
    for metric, actual, limit, is_max in checks:
        if limit is None:
            continue
        bound = "max" if is_max else "min"
        if is_max and actual > limit:
            violations.append(
                f"{metric} ({_fmt(actual)}) exceeds {bound}_{metric} ({_fmt(limit)})"
            )
        elif not is_max and actual < limit:
            violations.append(
                f"{metric} ({_fmt(actual)}) is below {bound}_{metric} ({_fmt(limit)})"
            )
    return violations


def _fmt(value: float) -> str:
    if isinstance(value, int):
        return str(int(value))
    return f"{value:.2f}"
