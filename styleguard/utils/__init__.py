"""Utility helpers for the style checker."""

from .fileio import decode_lines, normalize_lines, read_source_lines, read_yaml_file
from .code import DEFAULT_EXTENSIONS, iter_code_files

__all__ = [
    "decode_lines",
    "normalize_lines",
    "read_source_lines",
    "read_yaml_file",
    "DEFAULT_EXTENSIONS",
    "iter_code_files",
]
