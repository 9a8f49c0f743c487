"""Link Recipes.

This module builds link recipes as structured values rather than strings.

Design:
    - A recipe is a tuple of argument tokens; tokens may contain placeholders
      that are resolved only when the recipe is rendered for the host tool
    - RecipeFactory is the only place that turns toolchain capabilities into
      linker arguments
    - MSVC-like toolchains get no recipe at all: UnsupportedToolchainError
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Sequence, Tuple

from ..config.options import BuildOptions, LinkMode
from ..toolchain.profile import ToolchainProfile

# Placeholders resolved at render time
OUTPUT = "{output}"
OBJECTS = "{objects}"
CORE_OBJECTS = "{core_objects}"

PLACEHOLDERS = (OUTPUT, OBJECTS, CORE_OBJECTS)

# Image version embedded into MinGW DLLs
IMAGE_VERSION = "0.0.9"


@dataclass(frozen=True)
class LinkRecipe:
    """Commands that produce one target.

    ``prepare`` holds commands run before the link (e.g., creating the output
    directory); ``arguments`` is the link command itself.
    """

    arguments: Tuple[str, ...]
    prepare: Tuple[Tuple[str, ...], ...] = ()

    def commands(self) -> List[Tuple[str, ...]]:
        return list(self.prepare) + [self.arguments]

    def resolve(self, substitutions: Mapping[str, str]) -> List[List[str]]:
        """Substitute placeholders in every command.

        Args:
            substitutions: Placeholder to text mapping; placeholders missing
                from the mapping are left as they are

        Returns:
            List of commands, each a list of tokens
        """
        resolved = []
        for command in self.commands():
            tokens = []
            for token in command:
                for placeholder in PLACEHOLDERS:
                    if placeholder in token and placeholder in substitutions:
                        token = token.replace(placeholder, substitutions[placeholder])
                tokens.append(token)
            resolved.append(tokens)
        return resolved

    def render(self, substitutions: Mapping[str, str]) -> List[str]:
        """Render every command as a single line."""
        return [" ".join(t for t in tokens if t) for tokens in self.resolve(substitutions)]


class RecipeFactory:
    """Creates link recipes for a toolchain profile.

    Example usage:
        factory = RecipeFactory(profile, BuildOptions(profiling=True))
        recipe = factory.shared_library()
        recipe.render({OUTPUT: "$(LIBSASS_LIB)", OBJECTS: "$(LIBSASS_OBJ)"})
    """

    def __init__(self, profile: ToolchainProfile, options: BuildOptions = BuildOptions()):
        self.profile = profile
        self.options = options

    def shared_library(
        self,
        link_core: bool = False,
        output_dir: str = "",
        feature: str = "shared library linking",
    ) -> LinkRecipe:
        """
        Create the recipe for a shared object.

        Args:
            link_core: Link the object against the core library (plugins)
            output_dir: Directory to create before linking, if any
            feature: Feature name reported when the toolchain can't do this

        Returns:
            LinkRecipe

        Raises:
            UnsupportedToolchainError: If the toolchain can't link shared objects
        """
        self.profile.require_shared_linking(feature)

        args: List[str] = ["$(LD)", "$(OPTIMIZE)", "-lstdc++", "-shared", "-o", OUTPUT]
        if self.profile.emits_import_library:
            args.extend([
                f"-Wl,--out-implib,{OUTPUT}.a",
                f"-Wl,--major-image-version,{IMAGE_VERSION}",
                f"-Wl,--minor-image-version,{IMAGE_VERSION}",
            ])
        args.extend(self.options.link_flags())
        args.append(OBJECTS)
        if link_core:
            args.extend(self._core_link_args())

        prepare: Tuple[Tuple[str, ...], ...] = ()
        if output_dir:
            prepare = (("$(MKPATH)", output_dir),)

        return LinkRecipe(arguments=tuple(args), prepare=prepare)

    def plugin(self, output_dir: str) -> LinkRecipe:
        """Create the recipe for a plugin shared object."""
        self.profile.require_plugin_linking()
        return self.shared_library(
            link_core=True, output_dir=output_dir, feature="plugin linking"
        )

    def executable(self) -> LinkRecipe:
        """
        Create the recipe for an executable linked against the core library.

        Raises:
            UnsupportedToolchainError: If the toolchain can't link the core
        """
        self.profile.require_shared_linking("cli tool linking")

        args: List[str] = ["$(LD)", "-o", OUTPUT, "$(LDFLAGS)", OBJECTS, "$(LIBS)"]
        args.extend(self._core_link_args())
        args.extend(["$(OPTIMIZE)", "-lstdc++", "-std=c++0x"])
        args.extend(self.options.link_flags())
        if self.profile.needs_libdl:
            args.append("-ldl")

        return LinkRecipe(arguments=tuple(args))

    def _core_link_args(self) -> List[str]:
        if self.options.link_mode is LinkMode.STATIC:
            return [CORE_OBJECTS]
        return ["-L$(INST_LIB)", "-lsass"]


def substitutions_for(
    output: str, objects: Sequence[str], core_objects: Sequence[str] = ()
) -> Dict[str, str]:
    """Build a placeholder mapping from concrete paths."""
    return {
        OUTPUT: output,
        OBJECTS: " ".join(objects),
        CORE_OBJECTS: " ".join(core_objects),
    }
