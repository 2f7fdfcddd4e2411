"""Loader tier classification and package aggregation for runtime images."""

from .aggregator import ModuleDataAggregator
from .aggregator import TierView
from .aggregator import package_to_path
from .classifier import DEFAULT_BASE_MODULE
from .classifier import LoaderClassifier
from .classifier import TierModuleSet
from .classifier import classify
from .errors import ImageModulesError
from .errors import InvalidTierError
from .errors import LayoutError
from .errors import MissingModuleDataError
from .modules import ImageModules
from .tiers import LoaderTier
from .writer import ImageWriter
from .writer import ModuleDataBuilder

__all__ = [
    "DEFAULT_BASE_MODULE",
    "ImageModules",
    "ImageModulesError",
    "ImageWriter",
    "InvalidTierError",
    "LayoutError",
    "LoaderClassifier",
    "LoaderTier",
    "MissingModuleDataError",
    "ModuleDataAggregator",
    "ModuleDataBuilder",
    "TierModuleSet",
    "TierView",
    "classify",
    "package_to_path",
]
