"""Classification of modules into loader tiers.

A LoaderClassifier is built once from the three tier sets and is immutable
afterwards. Within a tier the base module (java.base by default) always comes
first and the remaining modules follow in code point order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from .tiers import LoaderTier

logger = logging.getLogger(__name__)

DEFAULT_BASE_MODULE = "java.base"


@dataclass(frozen=True)
class TierModuleSet:
    """Ordered, duplicate-free module names mapped to one loader tier."""

    tier: LoaderTier
    modules: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.modules)

    def __contains__(self, module: object) -> bool:
        return module in self.modules


def order_modules(modules: Iterable[str], base_module: str = DEFAULT_BASE_MODULE) -> tuple[str, ...]:
    """Order module names with the base module first, the rest sorted.

    Args:
        modules: Module names (duplicates are collapsed)
        base_module: Name that sorts ahead of everything else when present

    Returns:
        Ordered tuple of distinct module names
    """
    unique = set(modules)
    head = (base_module,) if base_module in unique else ()
    return head + tuple(sorted(unique - {base_module}))


def classify(
    boot: Iterable[str],
    ext: Iterable[str],
    app: Iterable[str],
    base_module: str = DEFAULT_BASE_MODULE,
) -> dict[LoaderTier, TierModuleSet]:
    """Map each non-empty module set to its loader tier.

    Tiers whose input is empty get no entry at all.

    Args:
        boot: Modules for the boot loader
        ext: Modules for the extension loader
        app: Modules for the application loader
        base_module: Module that must come first within its tier

    Returns:
        Dict of tier -> TierModuleSet, in tier id order
    """
    result: dict[LoaderTier, TierModuleSet] = {}
    for tier, modules in ((LoaderTier.BOOT, boot), (LoaderTier.EXT, ext), (LoaderTier.APP, app)):
        ordered = order_modules(modules, base_module)
        if not ordered:
            continue
        result[tier] = TierModuleSet(tier=tier, modules=ordered)
        logger.debug(f"Mapped {len(ordered)} modules to {tier.label}")
    return result


class LoaderClassifier:
    """Fixed mapping of modules to loader tiers."""

    def __init__(
        self,
        boot: Iterable[str] = (),
        ext: Iterable[str] = (),
        app: Iterable[str] = (),
        base_module: str = DEFAULT_BASE_MODULE,
    ):
        """Classify the three tier sets.

        Args:
            boot: Modules for the boot loader
            ext: Modules for the extension loader
            app: Modules for the application loader
            base_module: Module that must come first within its tier
        """
        self.base_module = base_module
        self._tiers = classify(boot, ext, app, base_module)

    @property
    def tiers(self) -> tuple[LoaderTier, ...]:
        """Populated tiers in id order."""
        return tuple(sorted(self._tiers))

    def modules_for(self, tier: LoaderTier) -> tuple[str, ...]:
        """Return the ordered modules of a tier, or () if it was never populated."""
        entry = self._tiers.get(tier)
        return entry.modules if entry is not None else ()

    def tier_of(self, module: str) -> LoaderTier | None:
        """Return the first tier (by id) holding module, or None."""
        for tier in self.tiers:
            if module in self._tiers[tier]:
                return tier
        return None

    @staticmethod
    def tier_from_id(tier_id: int) -> LoaderTier:
        """Look up a tier by id.

        Raises:
            InvalidTierError: If tier_id is not 0, 1 or 2
        """
        return LoaderTier.from_id(tier_id)

    def __repr__(self) -> str:
        counts = ", ".join(f"{tier.label}={len(self._tiers[tier])}" for tier in self.tiers)
        return f"LoaderClassifier({counts})"
