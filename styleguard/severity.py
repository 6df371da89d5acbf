"""Severity definitions for style violations."""

from __future__ import annotations

from enum import Enum


class Severity(str, Enum):
    """Enumerate the supported severity levels for violations."""

    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"

    @property
    def rank(self) -> int:
        """Return an integer ranking, INFO < WARN < ERROR."""

        ordering = {
            Severity.INFO: 0,
            Severity.WARN: 1,
            Severity.ERROR: 2,
        }
        return ordering[self]

    @classmethod
    def parse(cls, value: "str | Severity") -> "Severity":
        if isinstance(value, Severity):
            return value
        normalized = str(value).strip().upper()
        if normalized == "WARNING":
            normalized = "WARN"
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown severity: {value!r}") from None
