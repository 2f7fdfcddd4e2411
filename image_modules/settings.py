"""Scope-aware YAML settings for image-modules.

Scope priority (most specific wins):
1. local (.image-modules/settings.local.yaml) - machine-specific
2. project (.image-modules/settings.yaml) - committed with the build
3. global (~/.image-modules/settings.yaml) - user defaults

Recognized keys:

```yaml
base_module: java.base
logging:
  level: DEBUG
  path: ./image-modules.log.jsonl
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml

from .classifier import DEFAULT_BASE_MODULE

logger = logging.getLogger(__name__)

Scope = Literal["local", "project", "global"]


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    global_settings: Path
    project_settings: Path
    local_settings: Path

    @classmethod
    def default(cls) -> SettingsPaths:
        return cls(
            global_settings=Path.home() / ".image-modules" / "settings.yaml",
            project_settings=Path.cwd() / ".image-modules" / "settings.yaml",
            local_settings=Path.cwd() / ".image-modules" / "settings.local.yaml",
        )

    @classmethod
    def under(cls, root: Path) -> SettingsPaths:
        """All three scopes inside one directory (handy for tests and sandboxes)."""
        return cls(
            global_settings=root / "global" / "settings.yaml",
            project_settings=root / "settings.yaml",
            local_settings=root / "settings.local.yaml",
        )


class AppSettings:
    """Settings manager with scope-aware merging.

    Usage:
        settings = AppSettings()
        base = settings.get_base_module()  # "java.base" unless configured
        settings.set_base_module("core.base", scope="project")
    """

    def __init__(self, paths: SettingsPaths | None = None) -> None:
        self.paths = paths or SettingsPaths.default()

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes, global first."""
        result: dict[str, Any] = {}
        for scope in ("global", "project", "local"):
            result = self._deep_merge(result, self._read_scope(scope))
        return result

    # ----- Base module -----

    def get_base_module(self) -> str:
        """Configured base module, or java.base."""
        value = self.get_merged_settings().get("base_module")
        return value if isinstance(value, str) and value else DEFAULT_BASE_MODULE

    def set_base_module(self, name: str, scope: Scope = "project") -> None:
        self._update_setting("base_module", name, scope)
        logger.info(f"Set base module to '{name}' at {scope} scope")

    def clear_base_module(self, scope: Scope = "project") -> None:
        self._remove_setting("base_module", scope)

    # ----- Logging -----

    def get_logging(self) -> dict[str, Any]:
        """Logging section ({"level": ..., "path": ...}), empty if unset."""
        section = self.get_merged_settings().get("logging")
        return section if isinstance(section, dict) else {}

    # ----- Scope utilities -----

    def _get_scope_path(self, scope: Scope) -> Path:
        return {
            "local": self.paths.local_settings,
            "project": self.paths.project_settings,
            "global": self.paths.global_settings,
        }[scope]

    def _read_scope(self, scope: Scope) -> dict[str, Any]:
        """Read one scope; missing or malformed files read as empty."""
        path = self._get_scope_path(scope)
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Ignoring settings file {path}: expected a mapping")
            return {}
        return content

    def _write_scope(self, scope: Scope, settings: dict[str, Any]) -> None:
        path = self._get_scope_path(scope)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(settings, f, default_flow_style=False)

    def _update_setting(self, key: str, value: Any, scope: Scope) -> None:
        settings = self._read_scope(scope)
        settings[key] = value
        self._write_scope(scope, settings)

    def _remove_setting(self, key: str, scope: Scope) -> None:
        settings = self._read_scope(scope)
        if key in settings:
            del settings[key]
            self._write_scope(scope, settings)

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
