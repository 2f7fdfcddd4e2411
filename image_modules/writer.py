"""Hand-off of tier views to an image writer.

The writer itself (byte layout, compression, offsets) lives outside this
package; it only has to accept a record label and a TierView.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any
from typing import Protocol

from .aggregator import TierView
from .tiers import LoaderTier

logger = logging.getLogger(__name__)


class ImageWriter(Protocol):
    """Anything that can serialize a tier's module data into an image."""

    def write_module_data(self, label: str, view: TierView) -> Any: ...


@dataclass(frozen=True)
class ModuleDataBuilder:
    """A tier view bound to the writer that will serialize it."""

    writer: ImageWriter
    tier: LoaderTier
    view: TierView

    @property
    def label(self) -> str:
        return self.tier.label

    @property
    def module_count(self) -> int:
        return len(self.view)

    @property
    def package_count(self) -> int:
        return sum(len(packages) for packages in self.view.values())

    def build(self) -> Any:
        """Pass the label and view to the writer; returns whatever it returns."""
        logger.debug(f"Writing {self.label}: {self.module_count} modules, {self.package_count} packages")
        return self.writer.write_module_data(self.label, self.view)
