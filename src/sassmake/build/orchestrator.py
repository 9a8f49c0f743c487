"""
Makefile generation orchestration.

This module ties the generation steps together for one project:
- Configuration parsing (sassmake.ini plus command-line overrides)
- Toolchain classification
- Source manifest loading (libsass/Makefile.conf)
- Target graph construction, memoized in a PostambleCache
- Compile options (include paths, defines, optimization level)
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config.ini_parser import BuildConfig
from ..config.manifest import SourceManifestParser, load_libsass_version, load_manifest
from ..config.options import BuildOptions, FeatureFlags
from ..config.plugins import PluginSet
from ..toolchain.platform_utils import PlatformDetector
from ..toolchain.profile import ToolchainProfile
from .compile_options import CompileOptions, compile_options_for
from .graph_builder import TargetGraphBuilder
from .makefile_renderer import MakefileRenderer
from .postamble import MakefileHooks, PostambleCache
from .targets import TargetGraph

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "sassmake.ini"


@dataclass(frozen=True)
class GenerationSettings:
    """Fully resolved inputs of one generation run."""

    manifest_path: Path
    compiler: str
    os_id: str
    features: FeatureFlags
    options: BuildOptions
    plugins: PluginSet


class MakefileOrchestrator:
    """
    Resolves settings and generates the Makefile fragment for a project.

    Example usage:
        orchestrator = MakefileOrchestrator(Path("."), sassc=True)
        print(orchestrator.generate())
    """

    def __init__(
        self,
        project_dir: Path,
        config: Optional[BuildConfig] = None,
        compiler: Optional[str] = None,
        os_id: Optional[str] = None,
        sassc: Optional[bool] = None,
        plugins: Optional[bool] = None,
        profiling: Optional[bool] = None,
        debug: Optional[bool] = None,
    ):
        """
        Initialize orchestrator.

        Arguments left as None fall back to sassmake.ini, then to defaults.

        Args:
            project_dir: Project root containing the libsass checkout
            config: Parsed configuration (default: project_dir/sassmake.ini)
            compiler: Compiler override
            os_id: OS identifier override
            sassc: Build the sassc CLI tool
            plugins: Build the plugin set
            profiling: Compile and link with gcov instrumentation
            debug: Compile a debug build
        """
        self.project_dir = Path(project_dir)
        self.config = config if config is not None else BuildConfig.load(self.project_dir / CONFIG_FILENAME)
        self.settings = self._resolve(compiler, os_id, sassc, plugins, profiling, debug)
        self.cache = PostambleCache(self._build_graph)
        self.hooks = MakefileHooks(self.cache)

    def _resolve(
        self,
        compiler: Optional[str],
        os_id: Optional[str],
        sassc: Optional[bool],
        plugins: Optional[bool],
        profiling: Optional[bool],
        debug: Optional[bool],
    ) -> GenerationSettings:
        features = self.config.get_feature_flags()
        if sassc is not None:
            features = replace(features, build_cli_tool=sassc)
        if plugins is not None:
            features = replace(features, build_plugin_set=plugins)

        options = self.config.get_build_options()
        if profiling is not None:
            options = replace(options, profiling=profiling)
        if debug is not None:
            options = replace(options, debug=debug)

        return GenerationSettings(
            manifest_path=self.config.get_manifest_path(self.project_dir),
            compiler=PlatformDetector.detect_compiler(compiler or self.config.get_compiler()),
            os_id=os_id or PlatformDetector.detect_os_id(),
            features=features,
            options=options,
            plugins=self.config.get_plugins(),
        )

    def _build_graph(self) -> TargetGraph:
        settings = self.settings
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Platform: {PlatformDetector.get_platform_info()}")
        if settings.features.build_cli_tool:
            logger.info("Building sassc cli util")
        if settings.features.build_plugin_set:
            logger.info("Building libsass plugins")

        profile = ToolchainProfile.classify(settings.compiler, settings.os_id)
        manifest = load_manifest(settings.manifest_path, SourceManifestParser())
        logger.info(
            f"Parsed {settings.manifest_path}: {len(manifest.c_sources)} C and "
            f"{len(manifest.cpp_sources)} C++ sources"
        )

        builder = TargetGraphBuilder(profile, settings.options, settings.plugins)
        return builder.build(manifest, settings.features)

    def graph(self) -> TargetGraph:
        return self.cache.graph()

    def compile_options(self) -> CompileOptions:
        """Get the compile options; the version is read next to the manifest."""
        settings = self.settings
        if settings.options.debug:
            logger.info("Compiling debug build")
        if settings.options.profiling:
            logger.info("Compiling with code profiling")

        version = load_libsass_version(settings.manifest_path.parent / "VERSION")
        return compile_options_for(
            settings.features, settings.options, version, settings.plugins
        )

    def generate(self) -> str:
        """
        Generate the complete Makefile fragment.

        Returns:
            Compile options, extra rules, then a double-colon clean rule

        Raises:
            ManifestFormatError: If the manifest is missing or malformed
            UnsupportedToolchainError: If a requested target can't be linked
            InvalidTargetError: If target construction is inconsistent
        """
        compile_options = MakefileRenderer().render_compile_options(self.compile_options())
        header = f"# Generated by sassmake {__version__}\n\n{compile_options.rstrip()}"
        rules = self.hooks.postamble(header)
        clean = self.hooks.clean("clean ::\n")
        return rules + "\n" + clean
