"""
sassmake.ini configuration parser.

This module reads the optional project configuration that selects which
optional targets are generated and how they are compiled and linked.

Example sassmake.ini:
    [sassmake]
    sassc = true
    plugins = true
    compiler = gcc
    profiling = false
    debug = false
    link_mode = shared
    link_flags = -Wl,--as-needed
    manifest = libsass/Makefile.conf

    [plugins]
    digest = pending
"""

import configparser
from pathlib import Path
from typing import Dict, Optional

from .options import BuildOptions, FeatureFlags, LinkMode
from .plugins import DEFAULT_PLUGINS, PluginSet, PluginState


class BuildConfigError(Exception):
    """Exception raised for sassmake.ini configuration errors."""

    pass


class BuildConfig:
    """
    Parser for sassmake.ini configuration files.

    A missing file is not an error: every setting has a default.

    Usage:
        config = BuildConfig.load(Path("sassmake.ini"))
        features = config.get_feature_flags()
        plugins = config.get_plugins()
    """

    SECTION = "sassmake"
    PLUGINS_SECTION = "plugins"
    DEFAULT_MANIFEST = "libsass/Makefile.conf"
    KNOWN_KEYS = {
        "sassc", "plugins", "compiler", "profiling", "debug", "link_mode", "link_flags", "manifest",
    }

    def __init__(self, parser: Optional[configparser.ConfigParser] = None, path: Optional[Path] = None):
        """
        Initialize from an already-read parser.

        Args:
            parser: Parsed configuration (default: empty)
            path: File the configuration came from, for error messages
        """
        self.path = path
        if parser is None:
            parser = configparser.ConfigParser(
                interpolation=configparser.ExtendedInterpolation()
            )
        self.config = parser

        if self.SECTION in self.config:
            unknown = set(self.config[self.SECTION]) - self.KNOWN_KEYS
            if unknown:
                raise BuildConfigError(
                    f"Unknown setting(s) in [{self.SECTION}] of {self._source()}: "
                    + ", ".join(sorted(unknown))
                )

    @classmethod
    def load(cls, ini_path: Path, required: bool = False) -> "BuildConfig":
        """
        Load configuration from a file.

        Args:
            ini_path: Path to sassmake.ini
            required: Raise if the file doesn't exist

        Returns:
            BuildConfig (with defaults only if the file is absent)

        Raises:
            BuildConfigError: If the file is required but missing, or cannot be parsed
        """
        parser = configparser.ConfigParser(
            interpolation=configparser.ExtendedInterpolation()
        )

        if not ini_path.exists():
            if required:
                raise BuildConfigError(f"Configuration file not found: {ini_path}")
            return cls(parser, ini_path)

        try:
            parser.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise BuildConfigError(f"Failed to parse {ini_path}: {e}") from e

        return cls(parser, ini_path)

    def _source(self) -> str:
        return str(self.path) if self.path else "configuration"

    def _get_bool(self, key: str, default: bool) -> bool:
        if self.SECTION not in self.config:
            return default
        try:
            return self.config.getboolean(self.SECTION, key, fallback=default)
        except (ValueError, configparser.Error) as e:
            raise BuildConfigError(f"Invalid value for '{key}' in {self._source()}: {e}") from e

    def _get_str(self, key: str) -> Optional[str]:
        if self.SECTION not in self.config:
            return None
        try:
            value = self.config[self.SECTION].get(key, "").strip()
        except configparser.Error as e:
            raise BuildConfigError(f"Invalid value for '{key}' in {self._source()}: {e}") from e
        return value or None

    def get_feature_flags(self) -> FeatureFlags:
        """
        Get the requested optional targets.

        Returns:
            FeatureFlags (defaults: no CLI tool, plugins enabled)
        """
        return FeatureFlags(
            build_cli_tool=self._get_bool("sassc", False),
            build_plugin_set=self._get_bool("plugins", True),
        )

    def get_build_options(self) -> BuildOptions:
        """
        Get compile and link options.

        Raises:
            BuildConfigError: If link_mode or a boolean is invalid
        """
        link_mode = LinkMode.SHARED
        value = self._get_str("link_mode")
        if value:
            try:
                link_mode = LinkMode.parse(value)
            except ValueError as e:
                raise BuildConfigError(f"{e} in {self._source()}") from e

        return BuildOptions(
            link_mode=link_mode,
            profiling=self._get_bool("profiling", False),
            debug=self._get_bool("debug", False),
            extra_link_flags=tuple((self._get_str("link_flags") or "").split()),
        )

    def get_compiler(self) -> Optional[str]:
        """Get the compiler override, if any."""
        return self._get_str("compiler")

    def get_manifest_path(self, project_dir: Path) -> Path:
        """Get the path of libsass's Makefile.conf relative to the project."""
        return project_dir / (self._get_str("manifest") or self.DEFAULT_MANIFEST)

    def get_plugin_states(self) -> Dict[str, PluginState]:
        """
        Get plugin state overrides from the [plugins] section.

        Raises:
            BuildConfigError: If a state value is invalid
        """
        if self.PLUGINS_SECTION not in self.config:
            return {}

        states = {}
        try:
            items = list(self.config[self.PLUGINS_SECTION].items())
        except configparser.Error as e:
            raise BuildConfigError(f"Invalid [{self.PLUGINS_SECTION}] in {self._source()}: {e}") from e

        for name, value in items:
            try:
                states[name] = PluginState.parse(value)
            except ValueError as e:
                raise BuildConfigError(f"Plugin '{name}' in {self._source()}: {e}") from e
        return states

    def get_plugins(self, declared: PluginSet = DEFAULT_PLUGINS) -> PluginSet:
        """
        Get plugin declarations with the configured states applied.

        Raises:
            BuildConfigError: If an override names an undeclared plugin
        """
        try:
            return declared.with_states(self.get_plugin_states())
        except KeyError as e:
            raise BuildConfigError(f"{e.args[0]} in {self._source()}") from e
