"""Module layout of a runtime image."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping

from .aggregator import ModuleDataAggregator
from .aggregator import TierView
from .classifier import DEFAULT_BASE_MODULE
from .classifier import LoaderClassifier
from .tiers import LoaderTier
from .writer import ImageWriter
from .writer import ModuleDataBuilder


class ImageModules:
    """Loader tier classification plus module packages for one image build.

    Usage:
        modules = ImageModules({"java.base", "java.logging"}, set(), {"com.example.app"})
        modules.set_packages("java.base", {"java.lang", "java.util"})
        ...
        view = modules.build_view(LoaderTier.BOOT)
    """

    def __init__(
        self,
        boot: Iterable[str] = (),
        ext: Iterable[str] = (),
        app: Iterable[str] = (),
        *,
        base_module: str = DEFAULT_BASE_MODULE,
    ):
        self.classifier = LoaderClassifier(boot, ext, app, base_module=base_module)
        self.aggregator = ModuleDataAggregator()

    @property
    def base_module(self) -> str:
        return self.classifier.base_module

    def modules_for(self, tier: LoaderTier) -> tuple[str, ...]:
        return self.classifier.modules_for(tier)

    def set_packages(self, module: str, packages: Iterable[str]) -> None:
        self.aggregator.set_packages(module, packages)

    def packages_by_module(self) -> Mapping[str, frozenset[str]]:
        return self.aggregator.packages_by_module()

    def missing_modules(self, tier: LoaderTier) -> list[str]:
        """Modules of tier, in tier order, that still have no packages set."""
        return self.aggregator.missing_modules(tier, self.classifier)

    def build_view(self, tier: LoaderTier) -> TierView:
        """Build the module -> package path view for tier.

        Raises:
            MissingModuleDataError: If a module in the tier has no packages set
        """
        return self.aggregator.build_view(tier, self.classifier)

    def build_module_data(self, tier: LoaderTier, writer: ImageWriter) -> ModuleDataBuilder:
        """Bind the tier's view to writer; call build() on the result to write it."""
        return ModuleDataBuilder(writer=writer, tier=tier, view=self.build_view(tier))
