"""Loader tiers for modules in a runtime image."""

from __future__ import annotations

from enum import Enum
from functools import total_ordering

from .errors import InvalidTierError


@total_ordering
class LoaderTier(Enum):
    """Class-loading tier a module is mapped to.

    Each member carries a stable small integer id (used wherever tiers are
    stored as numbers) and the label the image writer uses as the record name.

    Members:
    - BOOT: boot loader ("bootmodules")
    - EXT: extension loader ("extmodules")
    - APP: application loader ("appmodules")
    """

    BOOT = (0, "bootmodules")
    EXT = (1, "extmodules")
    APP = (2, "appmodules")

    def __init__(self, tier_id: int, label: str):
        self.id = tier_id
        self.label = label

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LoaderTier):
            return NotImplemented
        return self.id < other.id

    @property
    def short_name(self) -> str:
        """Lowercase member name, e.g. "boot"."""
        return self.name.lower()

    @classmethod
    def from_id(cls, tier_id: int) -> LoaderTier:
        """Look up a tier by its integer id.

        Args:
            tier_id: 0, 1 or 2

        Returns:
            The matching LoaderTier

        Raises:
            InvalidTierError: If tier_id is not one of the known ids
        """
        # bool is an int subclass; True must not alias EXT
        if isinstance(tier_id, int) and not isinstance(tier_id, bool):
            tier = _BY_ID.get(tier_id)
            if tier is not None:
                return tier
        raise InvalidTierError(tier_id)

    @classmethod
    def from_label(cls, label: str) -> LoaderTier:
        """Look up a tier by writer label ("bootmodules") or short name ("boot")."""
        if isinstance(label, str):
            key = label.strip().lower()
            for tier in cls:
                if key in (tier.label, tier.short_name):
                    return tier
        raise InvalidTierError(label)


_BY_ID: dict[int, LoaderTier] = {tier.id: tier for tier in LoaderTier}
