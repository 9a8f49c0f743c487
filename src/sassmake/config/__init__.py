"""Configuration parsing modules for sassmake."""

from .ini_parser import BuildConfig, BuildConfigError
from .options import BuildOptions, FeatureFlags, LinkMode
from .manifest import (
    ManifestFormatError,
    SourceManifest,
    SourceManifestParser,
    load_libsass_version,
    load_manifest,
)
from .plugins import DEFAULT_PLUGINS, CompileRule, PluginDescriptor, PluginSet, PluginState

__all__ = [
    "BuildConfig",
    "BuildConfigError",
    "BuildOptions",
    "FeatureFlags",
    "LinkMode",
    "ManifestFormatError",
    "SourceManifest",
    "SourceManifestParser",
    "load_libsass_version",
    "load_manifest",
    "DEFAULT_PLUGINS",
    "CompileRule",
    "PluginDescriptor",
    "PluginSet",
    "PluginState",
]
