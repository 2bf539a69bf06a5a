"""Tests for result parsing."""

from pickercraft.services.result_parser import Result, parse_located, parse_results


class TestLocatedMode:
    """Tests for path:line:col:text parsing."""

    def test_parses_located_line(self) -> None:
        [result] = parse_results(["/a/b.txt:12:3:needle"], located=True)

        assert result.file == "/a/b.txt"
        assert result.line == 12
        assert result.column == 3
        assert result.match == "needle"
        assert result.raw == "/a/b.txt:12:3:needle"
        assert result.is_located is True

    def test_display_reformats_line(self) -> None:
        result = parse_located("/a/b.txt:12:3:needle")
        assert result.display() == "/a/b.txt:12:3: needle"

    def test_match_may_contain_colons(self) -> None:
        result = parse_located("src/app.py:4:1:x = {'a': 1}")
        assert result.file == "src/app.py"
        assert result.match == "x = {'a': 1}"

    def test_empty_match_text(self) -> None:
        result = parse_located("notes.md:1:1:")
        assert result.match == ""
        assert result.is_located is True

    def test_mismatched_lines_dropped(self) -> None:
        lines = ["a.py:1:2:ok", "not a match", "b.py:x:2:bad", "c.py:3:4:fine"]

        results = parse_results(lines, located=True)

        assert [r.file for r in results] == ["a.py", "c.py"]

    def test_parse_located_returns_none_for_plain_path(self) -> None:
        assert parse_located("just/a/path.txt") is None


class TestPlainMode:
    """Tests for file-per-line parsing."""

    def test_empty_lines_dropped(self) -> None:
        results = parse_results(["x.txt", "", "y.txt"])

        assert [r.file for r in results] == ["x.txt", "y.txt"]

    def test_plain_defaults(self) -> None:
        [result] = parse_results(["src/main.py"])

        assert result == Result(raw="src/main.py", file="src/main.py")
        assert result.line == 1
        assert result.column == 1
        assert result.match is None
        assert result.is_located is False
        assert result.display() == "src/main.py"

    def test_located_looking_line_stays_plain(self) -> None:
        [result] = parse_results(["a.py:1:2:text"], located=False)
        assert result.file == "a.py:1:2:text"


class TestParserProperties:
    """Order and idempotence."""

    def test_order_preserved(self) -> None:
        lines = [f"f{i}.txt:{i}:1:m" for i in range(1, 20)]
        results = parse_results(lines, located=True)
        assert [r.line for r in results] == list(range(1, 20))

    def test_idempotent(self) -> None:
        lines = ["a:1:1:x", "junk", "b:2:2:y"]
        assert parse_results(lines, located=True) == parse_results(lines, located=True)

    def test_empty_input(self) -> None:
        assert parse_results([]) == []
        assert parse_results([], located=True) == []
