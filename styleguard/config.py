"""Project configuration loaded from ``.styleguard.yaml``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigError
from .rules import Registry
from .rules.spec import load_registry
from .utils import DEFAULT_EXTENSIONS, read_yaml_file

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".styleguard.yaml"


def _string_list(path: Path, key: str, value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(path, f"'{key}' must be a list of strings")
    return list(value)


@dataclass
class StyleGuardConfig:
    """Settings that shape the registry and the set of scanned files."""

    rule_files: List[str] = field(default_factory=list)
    builtin: bool = True
    disable: List[str] = field(default_factory=list)
    severity: Dict[str, str] = field(default_factory=dict)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))

    @classmethod
    def load(cls, path: Optional[str | Path] = None) -> "StyleGuardConfig":
        """Read ``path`` (default ``.styleguard.yaml``); missing files give defaults."""

        config_path = Path(path) if path is not None else Path(CONFIG_FILENAME)
        try:
            data = read_yaml_file(config_path)
        except (OSError, yaml.YAMLError, UnicodeDecodeError) as exc:
            raise ConfigError(config_path, str(exc)) from None
        if data is None:
            if path is not None and not config_path.exists():
                raise ConfigError(config_path, "file not found")
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(config_path, "expected a mapping at the top level")
        unknown = sorted(set(data) - {"rules", "builtin", "disable", "severity", "extensions"})
        if unknown:
            logger.warning("Ignoring unknown config keys in %s: %s", config_path, ", ".join(map(str, unknown)))

        base = config_path.parent
        rule_files = [str(base / name) for name in _string_list(config_path, "rules", data.get("rules"))]
        builtin = data.get("builtin", True)
        if not isinstance(builtin, bool):
            raise ConfigError(config_path, "'builtin' must be true or false")
        severity = data.get("severity") or {}
        if not isinstance(severity, dict):
            raise ConfigError(config_path, "'severity' must map rule ids to severities")
        extensions = _string_list(config_path, "extensions", data.get("extensions")) or list(DEFAULT_EXTENSIONS)
        logger.debug("Loaded configuration from %s", config_path)
        return cls(
            rule_files=rule_files,
            builtin=builtin,
            disable=_string_list(config_path, "disable", data.get("disable")),
            severity={str(key): str(value) for key, value in severity.items()},
            extensions=[ext if ext.startswith(".") else f".{ext}" for ext in extensions],
        )

    def build_registry(self) -> Registry:
        """Load the configured rules, then drop disabled ones and apply overrides."""

        registry = load_registry(self.rule_files, include_builtin=self.builtin)
        if self.disable:
            registry = registry.without(self.disable)
        if self.severity:
            registry = registry.with_severities(self.severity)
        return registry
