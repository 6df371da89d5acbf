"""Basic file IO helpers."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, List, Sequence, Union

import yaml

from styleguard.errors import InputDecodeError

LINE_BREAK = re.compile(r"\r\n|\r|\n")


def read_yaml_file(path: Path) -> Any:
    """Return the parsed YAML if the file exists, otherwise ``None``."""

    if not path.exists():
        return None
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle)


def decode_lines(data: Union[bytes, str], source: str = "<input>") -> List[str]:
    """Split source text into lines without their line terminators."""

    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InputDecodeError(source, f"not valid UTF-8 at byte {exc.start}") from None
    if data.startswith("\ufeff"):
        data = data[1:]
    if not data:
        return []
    lines = LINE_BREAK.split(data)
    if lines[-1] == "":
        lines.pop()
    return lines


def read_source_lines(path: Path) -> List[str]:
    """Return the lines of a UTF-8 source file."""

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise InputDecodeError(path, exc.strerror or str(exc)) from None
    return decode_lines(data, source=str(path))


def normalize_lines(lines: Sequence[Union[str, bytes]], source: str = "<input>") -> List[str]:
    """Coerce a sequence of ``str``/``bytes`` lines into text lines."""

    normalized: List[str] = []
    for number, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode("utf-8")
            except UnicodeDecodeError:
                raise InputDecodeError(source, f"line {number} is not valid UTF-8") from None
        elif not isinstance(line, str):
            raise InputDecodeError(source, f"line {number} is {type(line).__name__}, expected text")
        normalized.append(line.rstrip("\r\n"))
    return normalized
