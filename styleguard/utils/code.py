"""Source file discovery helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Generator, Iterable

DEFAULT_EXTENSIONS = (".java",)


def iter_code_files(
    root_paths: Iterable[str], extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
) -> Generator[Path, None, None]:
    """Yield code files beneath the provided paths, sorted per root.

    Paths that name a file are yielded as-is, whatever their suffix.
    """

    for root in root_paths:
        root_path = Path(root)
        if root_path.is_file():
            yield root_path
            continue
        for path in sorted(root_path.rglob("*")):
            if path.suffix in extensions and path.is_file():
                yield path
