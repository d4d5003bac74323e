"""Tests for run id derivation."""

import re
from datetime import datetime

from change_eval.workspace.domain.run_id import make_run_id, sanitize_name


class TestSanitizeName:
    def test_whitespace_becomes_dashes_and_unsafe_chars_drop(self) -> None:
        assert sanitize_name("  Add greeting / v2!  ") == "Add-greeting--v2"

    def test_strips_leading_punctuation(self) -> None:
        assert sanitize_name("..-hidden") == "hidden"

    def test_caps_length(self) -> None:
        assert len(sanitize_name("a" * 250)) == 100

    def test_falls_back_when_nothing_usable_remains(self) -> None:
        assert sanitize_name("///") == "workspace"


class TestMakeRunId:
    def test_format_with_name(self) -> None:
        run_id = make_run_id("my eval", now=datetime(2026, 3, 4, 5, 6, 7))

        assert re.fullmatch(r"my-eval-20260304-050607-[0-9a-f]{6}", run_id)

    def test_defaults_prefix_to_run(self) -> None:
        assert make_run_id().startswith("run-")

    def test_ids_are_unique(self) -> None:
        now = datetime(2026, 1, 1)
        assert len({make_run_id("x", now=now) for _ in range(20)}) == 20
