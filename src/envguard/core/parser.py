"""Line-oriented parser for .env files."""

from __future__ import annotations

import re
from pathlib import Path

from envguard.models.env import EnvVariable, ParsedEnvFile, ParseError
from envguard.utils.errors import EnvFileError
from envguard.utils.logging import get_logger

logger = get_logger("parser")

LINE_SPLIT_RE = re.compile(r"\r?\n")
ASSIGNMENT_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)$")

# Closing quote must be followed by nothing or an inline comment
_DOUBLE_QUOTED_RE = re.compile(r'^"((?:[^"\\]|\\.)*)"(\s*#.*)?$')
_SINGLE_QUOTED_RE = re.compile(r"^'(.*?)'(\s*#.*)?$")

# Applied in order
_ESCAPES = (
    ("\\n", "\n"),
    ("\\r", "\r"),
    ("\\t", "\t"),
    ("\\\\", "\\"),
    ('\\"', '"'),
)

INVALID_ASSIGNMENT = "Invalid variable assignment format"


def _split_comment(comment_part: str | None) -> str | None:
    if comment_part is None:
        return None
    text = comment_part.strip()[1:].strip()
    return text or None


def _extract_value_and_comment(raw: str) -> tuple[str, str | None]:
    """Split the right-hand side of an assignment into value and comment.

    Quoted values keep their quotes here so that ``_unquote`` can tell
    quoted from unquoted input.
    """
    for regex, quote in ((_DOUBLE_QUOTED_RE, '"'), (_SINGLE_QUOTED_RE, "'")):
        m = regex.match(raw)
        if m:
            return f"{quote}{m.group(1)}{quote}", _split_comment(m.group(2))

    idx = raw.find("#")
    if idx == -1:
        return raw.strip(), None
    return raw[:idx].strip(), raw[idx + 1 :].strip() or None


def _unescape(text: str) -> str:
    for src, dst in _ESCAPES:
        text = text.replace(src, dst)
    return text


def _unquote(value: str) -> tuple[str, bool]:
    """Strip surrounding quotes and process escapes.

    Returns:
        Tuple of (clean value, was quoted)
    """
    text = value.strip()
    if len(text) >= 2 and text[0] == text[-1] == "'":
        return text[1:-1], True
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return _unescape(text[1:-1]), True
    return text, False


def parse_line(line: str, line_number: int) -> EnvVariable | ParseError:
    """Parse a single non-blank, non-comment line.

    Args:
        line: Raw line text
        line_number: 1-based line number

    Returns:
        The parsed variable, or a ParseError describing the problem
    """
    trimmed = line.strip()
    m = ASSIGNMENT_RE.match(trimmed)
    if not m:
        return ParseError(line_number=line_number, message=INVALID_ASSIGNMENT, line=trimmed)

    key, remainder = m.group(1), m.group(2)
    raw_value, comment = _extract_value_and_comment(remainder)
    value, is_quoted = _unquote(raw_value)

    return EnvVariable(
        key=key,
        value=value,
        line_number=line_number,
        is_quoted=is_quoted,
        comment=comment,
    )


def parse_content(content: str) -> ParsedEnvFile:
    """
    Parse .env content into variables and metadata.

    Malformed lines never abort parsing; they are collected as
    parse errors so every problem in a file can be reported at once.

    Args:
        content: Raw file text

    Returns:
        ParsedEnvFile with variables, comments, blank lines and parse errors
    """
    variables: list[EnvVariable] = []
    comments: list[str] = []
    empty_lines: list[int] = []
    parse_errors: list[ParseError] = []

    for i, line in enumerate(LINE_SPLIT_RE.split(content)):
        line_number = i + 1
        trimmed = line.strip()

        if not trimmed:
            empty_lines.append(line_number)
            continue

        if trimmed.startswith("#"):
            comments.append(trimmed[1:].strip())
            continue

        parsed = parse_line(line, line_number)
        if isinstance(parsed, ParseError):
            parse_errors.append(parsed)
        else:
            variables.append(parsed)

    logger.debug(
        f"Parsed {len(variables)} variables, {len(comments)} comments, "
        f"{len(parse_errors)} parse errors"
    )
    return ParsedEnvFile(
        variables=variables,
        comments=comments,
        empty_lines=empty_lines,
        parse_errors=parse_errors,
    )


def parse_file(path: str | Path) -> ParsedEnvFile:
    """
    Read and parse a .env file.

    Args:
        path: Path to the file

    Returns:
        ParsedEnvFile for the file contents

    Raises:
        EnvFileError: If the file cannot be read or decoded
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise EnvFileError(str(path), reason) from e
    return parse_content(content)


def stringify(variables: list[EnvVariable]) -> str:
    """
    Render variables back to .env text.

    Quoted values are wrapped in double quotes without re-escaping, so
    values containing quotes or newlines do not round-trip.

    Args:
        variables: Variables to render

    Returns:
        One ``KEY=value`` line per variable, joined with newlines
    """
    lines = []
    for var in variables:
        value = f'"{var.value}"' if var.is_quoted else var.value
        comment = f" # {var.comment}" if var.comment else ""
        lines.append(f"{var.key}={value}{comment}")
    return "\n".join(lines)
