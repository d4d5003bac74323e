"""Reads file trees from disk for reference-similarity scoring."""

from pathlib import Path

from change_eval.diff.domain.similarity import SimilarityReport, score_files

_IGNORED_DIRS = frozenset({".git"})


def list_files(root: Path) -> list[str]:
    """Relative POSIX paths of all regular files under ``root``, skipping ``.git``."""
    paths: list[str] = []
    for dirpath, dirnames, filenames in root.walk():
        dirnames[:] = sorted(d for d in dirnames if d not in _IGNORED_DIRS)
        for filename in filenames:
            full = dirpath / filename
            if full.is_file() and not full.is_symlink():
                paths.append(full.relative_to(root).as_posix())
    return sorted(paths)


def read_lines(path: Path) -> list[str]:
    """File content as lines with their terminators kept.

    Decoding is lossless: distinct bytes never decode to equal lines, so a
    file scores 1.0 only when it is byte-identical to its counterpart.
    """
    return path.read_bytes().decode("utf-8", errors="surrogateescape").splitlines(
        keepends=True
    )


def load_tree(root: Path) -> dict[str, list[str]]:
    return {rel: read_lines(root / rel) for rel in list_files(root)}


def compare_trees(modified_dir: Path, expected_dir: Path) -> SimilarityReport:
    """Blocking; run in a worker thread from async code."""
    return score_files(modified=load_tree(modified_dir), expected=load_tree(expected_dir))
