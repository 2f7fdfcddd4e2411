"""Module to package aggregation and per-tier views.

The aggregator owns which packages each module holds. Joined with a
LoaderClassifier it produces a TierView: module name -> sorted package paths,
in the tier's module order, ready for an image writer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from collections.abc import Mapping
from types import MappingProxyType

from .classifier import LoaderClassifier
from .errors import MissingModuleDataError
from .tiers import LoaderTier

logger = logging.getLogger(__name__)

TierView = dict[str, list[str]]


def package_to_path(package: str) -> str:
    """Translate a dotted package name to path form ("a.b.c" -> "a/b/c")."""
    return package.replace(".", "/")


class ModuleDataAggregator:
    """Holds the module -> packages mapping for one image build."""

    def __init__(self):
        self._packages: dict[str, frozenset[str]] = {}

    def set_packages(self, module: str, packages: Iterable[str]) -> None:
        """Set the full package set owned by a module.

        Replaces any earlier entry for the module; sets are never merged.

        Args:
            module: Module name
            packages: Dotted package names owned by the module
        """
        self._packages[module] = frozenset(packages)

    def packages_by_module(self) -> Mapping[str, frozenset[str]]:
        """Read-only view of the current module -> packages mapping."""
        return MappingProxyType(self._packages)

    def has_packages(self, module: str) -> bool:
        return module in self._packages

    def missing_modules(self, tier: LoaderTier, classifier: LoaderClassifier) -> list[str]:
        """Modules of a tier, in tier order, that have no package entry yet."""
        return [m for m in classifier.modules_for(tier) if m not in self._packages]

    def build_view(self, tier: LoaderTier, classifier: LoaderClassifier) -> TierView:
        """Build the module -> package path view for one tier.

        Args:
            tier: Tier to build
            classifier: Source of the tier's module order

        Returns:
            Ordered dict of module name -> sorted package paths

        Raises:
            MissingModuleDataError: If a module in the tier has no package entry
        """
        view: TierView = {}
        for module in classifier.modules_for(tier):
            packages = self._packages.get(module)
            if packages is None:
                raise MissingModuleDataError(module, tier)
            view[module] = sorted(package_to_path(p) for p in packages)

        logger.debug(f"Built {tier.label} view with {len(view)} modules")
        return view
