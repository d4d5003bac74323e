"""Tests for reference similarity scoring."""

import pytest

from change_eval.diff.domain.similarity import (
    FileCategory,
    line_similarity,
    score_files,
)

_TREE = {
    "a.py": ["def a():", "    return 1"],
    "b.py": ["def b():", "    return 2"],
    "README.md": ["# Demo"],
}


class TestLineSimilarity:
    def test_identical_is_exactly_one(self) -> None:
        assert line_similarity(["x", "y"], ["x", "y"]) == 1.0

    def test_disjoint_is_zero(self) -> None:
        assert line_similarity(["x"], ["y"]) == 0.0

    def test_partial_overlap(self) -> None:
        # 2 matching lines out of 3 + 3
        assert line_similarity(["a", "b", "c"], ["a", "b", "d"]) == pytest.approx(2 / 3)

    def test_both_empty_is_one(self) -> None:
        assert line_similarity([], []) == 1.0


class TestScoreFiles:
    def test_identical_trees_match_fully(self) -> None:
        report = score_files(modified=dict(_TREE), expected=dict(_TREE))

        assert report.aggregate_similarity == 1.0
        assert report.files_matched == 3
        assert report.total_files == 3

    def test_missing_file_counts_as_removed(self) -> None:
        modified = {k: v for k, v in _TREE.items() if k != "README.md"}

        report = score_files(modified=modified, expected=dict(_TREE))

        assert report.aggregate_similarity == pytest.approx(2 / 3)
        assert report.files_removed == 1
        removed = [f for f in report.files if f.category is FileCategory.REMOVED]
        assert [f.path for f in removed] == ["README.md"]

    def test_extra_file_counts_as_added(self) -> None:
        modified = dict(_TREE) | {"new.py": ["pass"]}

        report = score_files(modified=modified, expected=dict(_TREE))

        assert report.files_added == 1
        assert report.aggregate_similarity == pytest.approx(3 / 4)

    def test_changed_file_scores_partially(self) -> None:
        modified = dict(_TREE) | {"b.py": ["def b():", "    return 3"]}

        report = score_files(modified=modified, expected=dict(_TREE))

        assert report.files_changed == 1
        assert report.files_matched == 2
        assert report.aggregate_similarity == pytest.approx((1 + 1 + 0.5) / 3)

    def test_two_empty_trees_are_identical(self) -> None:
        report = score_files(modified={}, expected={})

        assert report.aggregate_similarity == 1.0
        assert report.total_files == 0
