"""Target graph construction.

Turns the parsed core library manifest, the toolchain profile and the
requested features into a TargetGraph:

    libsass (core library)
      <- sassc (CLI executable, optional)
      <- one plugin per enabled declaration, in declaration order

Either the complete graph is returned or an exception is raised; no partial
graph ever escapes.
"""

import logging
from typing import List, Optional, Tuple

from ..config.manifest import SourceManifest
from ..config.options import BuildOptions, FeatureFlags
from ..config.plugins import DEFAULT_PLUGINS, OBJ_EXT, PluginDescriptor, PluginSet
from ..toolchain.profile import ToolchainProfile
from .recipes import RecipeFactory
from .targets import BuildTarget, InvalidTargetError, TargetGraph, TargetKind, collect_cleanup

logger = logging.getLogger(__name__)


class TargetGraphBuilder:
    """Builds the target graph of the core library and its dependents."""

    CORE_NAME = "libsass"
    CORE_VARIABLE = "LIBSASS"
    CORE_OUTPUT = "$(INST_LIB)/libsass.$(SO)"

    CLI_NAME = "sassc"
    CLI_VARIABLE = "SASSC"
    CLI_OBJECT = f"plugins/sassc/sassc{OBJ_EXT}"
    CLI_OUTPUT = "$(INST_BIN)/sassc$(EXE_EXT)"

    def __init__(
        self,
        profile: ToolchainProfile,
        options: Optional[BuildOptions] = None,
        plugins: PluginSet = DEFAULT_PLUGINS,
    ):
        """
        Initialize builder.

        Args:
            profile: Classified toolchain
            options: Link options (default: shared linking, no profiling)
            plugins: Plugin declarations, in the order they are built
        """
        self.profile = profile
        self.options = options or BuildOptions()
        self.plugins = plugins
        self.recipes = RecipeFactory(profile, self.options)

    def build(self, manifest: SourceManifest, features: FeatureFlags) -> TargetGraph:
        """
        Build the target graph.

        Args:
            manifest: Parsed core library manifest
            features: Requested optional targets

        Returns:
            TargetGraph in canonical order

        Raises:
            UnsupportedToolchainError: If a requested target can't be linked
            InvalidTargetError: If a target would be structurally invalid
        """
        if not isinstance(manifest, SourceManifest):
            raise TypeError("A parsed SourceManifest is required to build the target graph")

        # Fail before constructing anything if plugins can't be linked at all
        if features.build_plugin_set:
            self.profile.require_plugin_linking()

        core = self._core_target(manifest)
        targets: List[BuildTarget] = [core]

        if features.build_cli_tool:
            targets.append(self._cli_target(core))

        skipped: List[PluginDescriptor] = []
        if features.build_plugin_set:
            for plugin in self.plugins:
                if not plugin.buildable:
                    reason = f" ({plugin.note})" if plugin.note else ""
                    logger.info(f"Skipping {plugin.state.value} plugin '{plugin.name}'{reason}")
                    skipped.append(plugin)
                    continue
                targets.append(self._plugin_target(plugin, core))

        graph = TargetGraph(
            targets=tuple(targets),
            cleanup_files=collect_cleanup(targets),
            skipped_plugins=tuple(skipped),
        )
        logger.info(f"Built target graph: {', '.join(graph.names())}")
        return graph

    def _side_outputs(self, output: str) -> Tuple[str, ...]:
        if self.profile.emits_import_library:
            return (f"{output}.a",)
        return ()

    def _core_target(self, manifest: SourceManifest) -> BuildTarget:
        objects = tuple(manifest.object_files())
        logger.debug(f"Core library has {len(objects)} objects")
        return BuildTarget(
            name=self.CORE_NAME,
            kind=TargetKind.LIBRARY,
            variable=self.CORE_VARIABLE,
            output=self.CORE_OUTPUT,
            objects=objects,
            recipe=self.recipes.shared_library(),
            side_outputs=self._side_outputs(self.CORE_OUTPUT),
        )

    def _cli_target(self, core: BuildTarget) -> BuildTarget:
        return BuildTarget(
            name=self.CLI_NAME,
            kind=TargetKind.EXECUTABLE,
            variable=self.CLI_VARIABLE,
            output=self.CLI_OUTPUT,
            objects=(self.CLI_OBJECT,),
            recipe=self.recipes.executable(),
            dependencies=(core,),
            optional=True,
        )

    def _plugin_target(self, plugin: PluginDescriptor, core: BuildTarget) -> BuildTarget:
        if not plugin.object_stems:
            raise InvalidTargetError(f"Plugin '{plugin.name}' declares no objects")

        return BuildTarget(
            name=plugin.name,
            kind=TargetKind.PLUGIN,
            variable=plugin.variable,
            output=plugin.output,
            objects=tuple(plugin.object_files()),
            recipe=self.recipes.plugin(plugin.output_dir),
            dependencies=(core,),
            optional=True,
            side_outputs=self._side_outputs(plugin.output),
            compile_rules=plugin.compile_rules,
        )


def build_target_graph(
    manifest: SourceManifest,
    profile: ToolchainProfile,
    features: FeatureFlags,
    options: Optional[BuildOptions] = None,
    plugins: PluginSet = DEFAULT_PLUGINS,
) -> TargetGraph:
    """Build a target graph in one call."""
    return TargetGraphBuilder(profile, options, plugins).build(manifest, features)
