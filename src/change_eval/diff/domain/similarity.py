"""Reference similarity — per-file line similarity and the aggregate over a file union."""

from difflib import SequenceMatcher
from enum import StrEnum

from pydantic import BaseModel, Field


class FileCategory(StrEnum):
    MATCHED = "matched"
    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"


class FileSimilarity(BaseModel, frozen=True):
    path: str
    category: FileCategory
    similarity: float = Field(ge=0.0, le=1.0)


class SimilarityReport(BaseModel, frozen=True):
    aggregate_similarity: float = Field(ge=0.0, le=1.0)
    files_matched: int = Field(ge=0)
    files_changed: int = Field(ge=0)
    files_added: int = Field(ge=0)
    files_removed: int = Field(ge=0)
    files: list[FileSimilarity] = Field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.files)


def line_similarity(modified: list[str], expected: list[str]) -> float:
    """Normalized common-subsequence ratio over lines; identical input gives exactly 1.0."""
    if modified == expected:
        return 1.0
    return SequenceMatcher(a=modified, b=expected, autojunk=False).ratio()


def score_files(
    modified: dict[str, list[str]], expected: dict[str, list[str]]
) -> SimilarityReport:
    """Score every path in the union of both trees.

    Files only in ``modified`` are added, files only in ``expected`` are removed;
    both score 0.0. The aggregate is the plain mean, and 1.0 for two empty trees.
    """
    files: list[FileSimilarity] = []
    for path in sorted(modified.keys() | expected.keys()):
        if path not in expected:
            files.append(
                FileSimilarity(path=path, category=FileCategory.ADDED, similarity=0.0)
            )
        elif path not in modified:
            files.append(
                FileSimilarity(path=path, category=FileCategory.REMOVED, similarity=0.0)
            )
        else:
            score = line_similarity(modified[path], expected[path])
            category = FileCategory.MATCHED if score == 1.0 else FileCategory.CHANGED
            files.append(FileSimilarity(path=path, category=category, similarity=score))

    aggregate = sum(f.similarity for f in files) / len(files) if files else 1.0
    counts = {category: 0 for category in FileCategory}
    for f in files:
        counts[f.category] += 1

    return SimilarityReport(
        aggregate_similarity=aggregate,
        files_matched=counts[FileCategory.MATCHED],
        files_changed=counts[FileCategory.CHANGED],
        files_added=counts[FileCategory.ADDED],
        files_removed=counts[FileCategory.REMOVED],
        files=files,
    )
