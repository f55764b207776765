"""Unit tests for the .env parser."""

import pytest

from envguard.core.parser import parse_content, parse_file, parse_line, stringify
from envguard.models.env import EnvVariable, ParseError
from envguard.utils.errors import EnvFileError


class TestParseContent:
    """Tests for parse_content."""

    def test_simple_assignment(self):
        """Test a plain KEY=value line."""
        parsed = parse_content("KEY=value")

        assert len(parsed.variables) == 1
        var = parsed.variables[0]
        assert var.key == "KEY"
        assert var.value == "value"
        assert var.line_number == 1
        assert var.is_quoted is False
        assert var.comment is None

    def test_whitespace_around_equals(self):
        """Test that spaces around = are allowed."""
        parsed = parse_content("KEY = value  ")
        assert parsed.variables[0].value == "value"

    def test_empty_value(self):
        """Test an assignment with no value."""
        parsed = parse_content("EMPTY=")
        assert parsed.variables[0].value == ""
        assert not parsed.has_errors

    def test_comments_and_blank_lines(self):
        """Test comment and blank line tracking."""
        parsed = parse_content("# header\n\nA=1\n   \n#  spaced  \n")

        assert parsed.comments == ["header", "spaced"]
        assert parsed.empty_lines == [2, 4, 6]
        assert [v.line_number for v in parsed.variables] == [3]

    def test_crlf_line_endings(self):
        """Test Windows line endings."""
        parsed = parse_content("A=1\r\nB=2\r\n")
        assert [(v.key, v.value) for v in parsed.variables] == [("A", "1"), ("B", "2")]

    def test_inline_comment(self):
        """Test unquoted value with inline comment."""
        var = parse_content("PORT=3000 # web port").variables[0]
        assert var.value == "3000"
        assert var.comment == "web port"

    def test_empty_inline_comment(self):
        """Test that a bare # is not recorded as a comment."""
        var = parse_content("PORT=3000 #").variables[0]
        assert var.value == "3000"
        assert var.comment is None

    def test_double_quoted_escapes(self):
        """Test escape processing inside double quotes."""
        var = parse_content('MSG="line1\\nline2\\ttab"').variables[0]
        assert var.value == "line1\nline2\ttab"
        assert var.is_quoted is True

    def test_double_quoted_escaped_quote(self):
        """Test an escaped quote inside double quotes."""
        var = parse_content('Q="say \\"hi\\""').variables[0]
        assert var.value == 'say "hi"'

    def test_double_quoted_hash_is_not_comment(self):
        """Test that # inside quotes is part of the value."""
        var = parse_content('A="foo # bar" # real comment').variables[0]
        assert var.value == "foo # bar"
        assert var.comment == "real comment"
        assert var.is_quoted is True

    def test_single_quoted_verbatim(self):
        """Test that single-quoted values are not unescaped."""
        var = parse_content("S='a\\nb # kept'").variables[0]
        assert var.value == "a\\nb # kept"
        assert var.is_quoted is True
        assert var.comment is None

    def test_single_quoted_with_comment(self):
        """Test single-quoted value followed by a comment."""
        var = parse_content("S='value' # note").variables[0]
        assert var.value == "value"
        assert var.comment == "note"

    def test_unterminated_quote_is_unquoted(self):
        """Test that a lone opening quote is kept as part of the value."""
        var = parse_content('A="unterminated').variables[0]
        assert var.value == '"unterminated'
        assert var.is_quoted is False

    def test_lone_quote_character(self):
        """Test that a single quote character is not treated as quoted."""
        var = parse_content('A="').variables[0]
        assert var.value == '"'
        assert var.is_quoted is False

    @pytest.mark.parametrize(
        "line",
        [
            "not a valid line",
            "1BAD=value",
            "BAD-KEY=value",
            "=value",
            "export",
        ],
    )
    def test_malformed_lines(self, line):
        """Test that malformed lines become parse errors."""
        parsed = parse_content(line)

        assert parsed.variables == []
        assert len(parsed.parse_errors) == 1
        error = parsed.parse_errors[0]
        assert error.message == "Invalid variable assignment format"
        assert error.line == line
        assert error.line_number == 1

    def test_malformed_line_does_not_stop_parsing(self):
        """Test that parsing continues after a malformed line."""
        parsed = parse_content("A=1\n!!!\nB=2")

        assert [v.key for v in parsed.variables] == ["A", "B"]
        assert [e.line_number for e in parsed.parse_errors] == [2]

    def test_every_line_is_accounted_for(self):
        """Test that each source line lands in exactly one bucket."""
        content = "# c\nA=1\n\nbroken\nB='x'\n"
        parsed = parse_content(content)

        line_numbers = sorted(
            [v.line_number for v in parsed.variables]
            + list(parsed.empty_lines)
            + [e.line_number for e in parsed.parse_errors]
            + [1]  # the comment line
        )
        assert len(parsed.comments) == 1
        assert line_numbers == list(range(1, content.count("\n") + 2))

    def test_deterministic(self):
        """Test that parsing the same content twice gives equal results."""
        content = 'A=1\nB="two" # c\nbad\n'
        assert parse_content(content) == parse_content(content)

    def test_duplicate_keys_last_wins(self):
        """Test duplicate key resolution."""
        parsed = parse_content("A=1\nB=2\nA=3")

        assert len(parsed.variables) == 3
        assert parsed.duplicate_keys == ["A"]
        assert [(v.key, v.value) for v in parsed.effective_variables()] == [("B", "2"), ("A", "3")]
        assert parsed.as_dict() == {"A": "3", "B": "2"}
        assert parsed.get("A").line_number == 3
        assert parsed.get("MISSING") is None


class TestParseLine:
    """Tests for parse_line."""

    def test_returns_variable(self):
        """Test a valid line."""
        assert isinstance(parse_line("A=1", 7), EnvVariable)
        assert parse_line("A=1", 7).line_number == 7

    def test_returns_error(self):
        """Test an invalid line."""
        result = parse_line("  nope  ", 3)
        assert isinstance(result, ParseError)
        assert result.line == "nope"


class TestStringify:
    """Tests for stringify."""

    def test_stringify(self):
        """Test rendering variables back to text."""
        variables = [
            EnvVariable(key="A", value="1", line_number=1),
            EnvVariable(key="B", value="x y", line_number=2, is_quoted=True),
            EnvVariable(key="C", value="z", line_number=3, comment="note"),
        ]
        assert stringify(variables) == 'A=1\nB="x y"\nC=z # note'

    def test_round_trip_simple_values(self):
        """Test that simple values survive parse/stringify/parse."""
        content = 'HOST=localhost\nPORT=8080 # port\nNAME="my app"\nEMPTY='
        first = parse_content(content)
        second = parse_content(stringify(first.variables))

        assert [(v.key, v.value, v.comment) for v in second.variables] == [
            (v.key, v.value, v.comment) for v in first.variables
        ]


class TestParseFile:
    """Tests for parse_file."""

    def test_reads_file(self, tmp_path):
        """Test parsing a file on disk."""
        path = tmp_path / ".env"
        path.write_text("A=1\nB=2\n", encoding="utf-8")

        parsed = parse_file(path)
        assert parsed.as_dict() == {"A": "1", "B": "2"}

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises EnvFileError."""
        with pytest.raises(EnvFileError) as exc_info:
            parse_file(tmp_path / "nope.env")

        assert exc_info.value.code == "FILE_READ_ERROR"
        assert exc_info.value.message.startswith("Failed to read file")

    def test_undecodable_file(self, tmp_path):
        """Test that invalid UTF-8 raises EnvFileError."""
        path = tmp_path / "bad.env"
        path.write_bytes(b"A=\xff\xfe\n")

        with pytest.raises(EnvFileError):
            parse_file(path)
