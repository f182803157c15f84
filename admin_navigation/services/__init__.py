from .assets import Asset, AssetLoader, AssetQueue
from .compatibility import CompatibilityProbe, StaticProbe, is_host_compatible
from .feature_gate import FeatureGate, RedirectRequested, filter_features
from .option_store import (
    DatabaseOptionStore,
    JsonOptionStore,
    MemoryOptionStore,
    OptionStoreError,
    build_option_store,
)

__all__ = [
    "Asset",
    "AssetLoader",
    "AssetQueue",
    "CompatibilityProbe",
    "DatabaseOptionStore",
    "FeatureGate",
    "JsonOptionStore",
    "MemoryOptionStore",
    "OptionStoreError",
    "RedirectRequested",
    "StaticProbe",
    "build_option_store",
    "filter_features",
    "is_host_compatible",
]
