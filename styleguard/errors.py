"""Error taxonomy for the style checker."""

from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


class StyleGuardError(Exception):
    """Base class for every error raised by styleguard."""


class DuplicateRuleError(StyleGuardError):
    """Two rule definitions share an identifier."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Duplicate rule id: {rule_id}")
        self.rule_id = rule_id


class NotFoundError(StyleGuardError, KeyError):
    """A rule id is not present in the registry."""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Unknown rule id: {rule_id}")
        self.rule_id = rule_id

    def __str__(self) -> str:
        return f"Unknown rule id: {self.rule_id}"


class InvalidRuleError(StyleGuardError):
    """A rule definition is malformed (missing fields, bad pattern)."""

    def __init__(self, rule_id: str, reason: str, origin: str | None = None) -> None:
        location = f" ({origin})" if origin else ""
        super().__init__(f"Invalid rule {rule_id}{location}: {reason}")
        self.rule_id = rule_id
        self.reason = reason
        self.origin = origin


class RuleFileError(StyleGuardError):
    """A rule-spec file cannot be read or has the wrong shape."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"Cannot load rules from {path}: {reason}")
        self.path = str(path)
        self.reason = reason


class ConfigError(StyleGuardError):
    """The project configuration file is malformed."""

    def __init__(self, path: PathLike, reason: str) -> None:
        super().__init__(f"Invalid configuration {path}: {reason}")
        self.path = str(path)
        self.reason = reason


class InputDecodeError(StyleGuardError):
    """Source text cannot be read as lines."""

    def __init__(self, source: PathLike, reason: str) -> None:
        super().__init__(f"Cannot decode {source}: {reason}")
        self.source = str(source)
        self.reason = reason
