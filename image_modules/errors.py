"""Exceptions raised by image_modules.

Every error derives from ImageModulesError so callers (and the CLI) can catch
the whole family in one place, while each concrete class also subclasses the
builtin it specializes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from .tiers import LoaderTier


class ImageModulesError(Exception):
    """Base class for image_modules errors."""


class InvalidTierError(ImageModulesError, ValueError):
    """Raised for a tier id or label that names no loader tier."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"invalid loader tier: {value!r}")


class MissingModuleDataError(ImageModulesError, LookupError):
    """Raised when a tier view needs packages for a module that never got any.

    Attributes:
        module: Name of the module with no package entry
        tier: Tier whose view was being built
    """

    def __init__(self, module: str, tier: LoaderTier | None = None):
        self.module = module
        self.tier = tier
        where = f" (tier '{tier.label}')" if tier is not None else ""
        super().__init__(f"No package data set for module '{module}'{where}")


class LayoutError(ImageModulesError):
    """Raised when a layout manifest cannot be read or is invalid."""
