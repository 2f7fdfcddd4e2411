"""Pydantic schema for image layout manifests.

A layout manifest records an already-decided tier assignment plus the
packages each module owns, e.g.:

```yaml
base_module: java.base   # optional
boot: [java.base, java.logging]
ext: []
app: [com.example.app]
packages:
  java.base: [java.lang, java.util]
  java.logging: [java.util.logging]
  com.example.app: [com.example.app]
```
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from .classifier import DEFAULT_BASE_MODULE
from .errors import LayoutError
from .modules import ImageModules

logger = logging.getLogger(__name__)


class ImageLayout(BaseModel):
    """Tier membership and module packages for one image."""

    model_config = ConfigDict(extra="forbid")

    base_module: str | None = Field(None, description="Module sorted first in its tier")
    boot: list[str] = Field(default_factory=list, description="Modules loaded by the boot loader")
    ext: list[str] = Field(default_factory=list, description="Modules loaded by the extension loader")
    app: list[str] = Field(default_factory=list, description="Modules loaded by the application loader")
    packages: dict[str, list[str]] = Field(
        default_factory=dict, description="Module name -> dotted package names it owns"
    )

    def to_image_modules(self, default_base_module: str = DEFAULT_BASE_MODULE) -> ImageModules:
        """Classify the tiers and load every packages entry.

        Args:
            default_base_module: Used when the manifest sets no base_module

        Returns:
            Populated ImageModules
        """
        modules = ImageModules(
            self.boot,
            self.ext,
            self.app,
            base_module=self.base_module or default_base_module,
        )
        for module, packages in self.packages.items():
            modules.set_packages(module, packages)
        return modules


def load_layout(path: Path) -> ImageLayout:
    """Read and validate a layout manifest.

    Raises:
        LayoutError: If the file cannot be read, is not YAML, or fails validation
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as e:
        raise LayoutError(f"Cannot read layout {path}: {e.strerror or e}") from e
    except UnicodeDecodeError as e:
        raise LayoutError(f"Layout {path} is not valid UTF-8: {e.reason} at byte {e.start}") from e
    except yaml.YAMLError as e:
        raise LayoutError(f"Layout {path} is not valid YAML: {e}") from e

    try:
        layout = ImageLayout.model_validate(data)
    except ValidationError as e:
        raise LayoutError(f"Invalid layout {path}: {e}") from e

    logger.debug(f"Loaded layout {path}: {len(layout.packages)} package entries")
    return layout
