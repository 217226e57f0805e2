"""Unit tests for normalize, join, result and pick_language."""

import pytest

from stepdocs import DiffLine, LineKind, join, normalize, pick_language, result

ADD, REM, CTX = LineKind.ADDED, LineKind.REMOVED, LineKind.CONTEXT


def hunk(*pairs):
    return [DiffLine(kind, content) for kind, content in pairs]


class TestNormalize:
    """Collapsing of remove/add pairs and the moved-insert heuristic."""

    def test_short_input_is_unchanged(self):
        lines = hunk((REM, "a"), (ADD, "a"))
        out = normalize(lines)
        assert out == lines
        assert out is not lines

    def test_identical_pair_collapses(self):
        lines = hunk((CTX, "a"), (REM, "b"), (ADD, "b"), (CTX, "c"))
        assert normalize(lines) == hunk((CTX, "a"), (CTX, "b"), (CTX, "c"))

    def test_no_pairs_means_no_change(self):
        lines = hunk((CTX, "a"), (REM, "b"), (ADD, "c"), (ADD, "d"), (CTX, "e"))
        assert normalize(lines) == lines

    def test_added_then_removed_is_not_a_pair(self):
        lines = hunk((CTX, "a"), (ADD, "b"), (REM, "b"), (CTX, "c"))
        assert normalize(lines) == lines

    def test_moved_insert(self):
        """The added mark moves below the last added line."""
        lines = hunk((REM, "x"), (ADD, "x"), (CTX, "a"), (ADD, "b"), (CTX, "c"))
        assert normalize(lines) == hunk((CTX, "x"), (CTX, "a"), (CTX, "b"), (ADD, "c"))

    def test_added_line_at_the_end_stays(self):
        lines = hunk((REM, "x"), (ADD, "x"), (CTX, "a"), (ADD, "b"))
        assert normalize(lines) == hunk((CTX, "x"), (CTX, "a"), (ADD, "b"))

    def test_added_line_at_the_start_stays(self):
        lines = hunk((ADD, "new"), (REM, "x"), (ADD, "x"), (CTX, "z"))
        assert normalize(lines) == hunk((ADD, "new"), (CTX, "x"), (CTX, "z"))

    def test_input_is_not_mutated(self):
        lines = hunk((REM, "x"), (ADD, "x"), (CTX, "a"), (ADD, "b"), (CTX, "c"))
        before = list(lines)
        normalize(lines)
        assert lines == before

    @pytest.mark.parametrize(
        "lines",
        [
            hunk((REM, "x"), (ADD, "x"), (CTX, "a"), (ADD, "b"), (CTX, "c")),
            hunk((REM, "a"), (REM, "a"), (ADD, "a"), (ADD, "a"), (CTX, "z")),
            hunk((CTX, "a"), (REM, "b"), (ADD, "b"), (REM, "c"), (ADD, "c"), (ADD, "d"), (CTX, "e")),
            hunk((CTX, "a"), (REM, "b"), (ADD, "c")),
        ],
    )
    def test_idempotent(self, lines):
        once = normalize(lines)
        assert normalize(once) == once


class TestRendering:
    """join and result."""

    LINES = hunk((CTX, "keep"), (REM, "old"), (ADD, "new"), (CTX, ""))

    def test_join(self):
        assert join(self.LINES) == " keep\n-old\n+new\n \n"

    def test_result_drops_removed_lines(self):
        assert result(self.LINES) == "keep\nnew\n\n"
        assert "old" not in result(self.LINES)

    def test_empty(self):
        assert join([]) == ""
        assert result([]) == ""


class TestPickLanguage:
    """Code fence languages."""

    @pytest.mark.parametrize(
        "path, language",
        [
            ("src/app.js", "javascript"),
            ("src/app.ts", "typescript"),
            ("scripts/run.sh", "shell"),
            ("README.md", "markdown"),
            ("pkg/main.py", "python"),
            ("data.unknownext", "unknownext"),
        ],
    )
    def test_language(self, path, language):
        assert pick_language(path) == language
