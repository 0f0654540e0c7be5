"""Env file helpers for the CLI."""

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from rice_cli.cli.configuration.errors import ParseError
from rice_cli.cli.configuration.options import ENV_SECTION_HEADER

_EXPORT_PREFIX = "export "
_QUOTES = "\"'"


@dataclass(frozen=True)
class EnvLine:
    """A single line of an env file, kept verbatim.

    `key` is set for assignment lines and empty for comments and blank lines.
    """

    text: str
    key: str = ""
    value: str = ""
    exported: bool = False


def parse_env_text(text: str, path: Path, strict: bool = True) -> list[EnvLine]:
    """Parse env file content into ordered lines.

    Args:
        text: File content.
        path: Path of the file, used in error messages.
        strict: Whether unparseable lines are an error. When false they are
            kept verbatim like comments.

    Returns:
        The parsed lines in file order.

    Raises:
        ParseError: If a line is neither blank, a comment nor KEY=value.
    """
    lines: list[EnvLine] = []
    for number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            lines.append(EnvLine(text=raw_line))
            continue
        key, separator, value = line.partition("=")
        key = key.strip()
        exported = key.startswith(_EXPORT_PREFIX)
        if exported:
            key = key[len(_EXPORT_PREFIX) :].strip()
        if not separator or not key:
            if strict:
                raise ParseError(path, f"line {number} is not a KEY=value assignment")
            lines.append(EnvLine(text=raw_line))
            continue
        lines.append(
            EnvLine(text=raw_line, key=key, value=_unquote(value.strip()), exported=exported)
        )
    return lines


def read_env_file(path: Path, strict: bool = True) -> list[EnvLine]:
    """Read an env file into ordered lines.

    Args:
        path: Path to the env file.
        strict: Whether unparseable lines are an error.

    Returns:
        Parsed lines, or an empty list when the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read.
        UnicodeDecodeError: If the file is not valid UTF-8.
        ParseError: If strict and the content is malformed.
    """
    if not path.exists():
        return []
    return parse_env_text(path.read_text(encoding="utf-8"), path, strict=strict)


def env_values(lines: list[EnvLine]) -> dict[str, str]:
    """Return key/value pairs from parsed lines; later keys win."""
    return {line.key: line.value for line in lines if line.key}


def merge_env_lines(
    lines: list[EnvLine],
    updates: Mapping[str, str | None],
) -> list[str]:
    """Apply updates to env lines without disturbing unrelated content.

    Keys with a value are updated in place at their first occurrence, or
    appended under the Rice section header. Keys whose value is empty or None
    are removed. Lines for keys not in `updates` are kept verbatim.

    Args:
        lines: Existing env file lines.
        updates: Values for the keys managed by the caller.

    Returns:
        The merged file lines.
    """
    merged: list[str] = []
    written: set[str] = set()
    for line in lines:
        if line.key not in updates:
            merged.append(line.text)
            continue
        value = updates[line.key]
        if not value or line.key in written:
            continue
        merged.append(format_env_line(line.key, value, exported=line.exported))
        written.add(line.key)

    missing = [key for key, value in updates.items() if value and key not in written]
    if missing:
        if ENV_SECTION_HEADER not in (text.strip() for text in merged):
            if merged and merged[-1].strip():
                merged.append("")
            merged.append(ENV_SECTION_HEADER)
        for key in missing:
            merged.append(format_env_line(key, str(updates[key])))
    return merged


def render_env_lines(lines: list[str]) -> str:
    """Join env lines into file content."""
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def format_env_line(key: str, value: str, exported: bool = False) -> str:
    """Return a KEY=value line, keeping an `export ` prefix when asked."""
    prefix = _EXPORT_PREFIX if exported else ""
    return f"{prefix}{key}={_escape_env_value(value)}"


def _escape_env_value(value: str) -> str:
    """Escape a value for env output.

    Values with whitespace or a leading or trailing quote are written as a
    double-quoted JSON string, which `_unquote` decodes back unchanged.

    Args:
        value: Value to escape.

    Returns:
        The escaped value.
    """
    if re.search(r"\s", value) or value[:1] in _QUOTES or value[-1:] in _QUOTES:
        return json.dumps(value, ensure_ascii=False)
    return value


def _unquote(value: str) -> str:
    """Strip one pair of matching quotes from a value.

    Double-quoted values that are valid JSON strings are decoded as such.
    """
    if len(value) < 2 or value[0] != value[-1] or value[0] not in _QUOTES:
        return value
    if value[0] == '"':
        try:
            return json.loads(value)
        except ValueError:
            pass
    return value[1:-1]
