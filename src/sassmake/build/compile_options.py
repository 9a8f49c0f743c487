"""Compile options.

Settings the host tool applies when compiling every object: include paths,
preprocessor defines, the optimization level and extra compiler flags.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..config.options import BuildOptions, FeatureFlags
from ..config.plugins import DEFAULT_PLUGINS, PluginSet

# Include paths every object is compiled with
BASE_INCLUDE_DIRS = (".", "libsass/include")


@dataclass(frozen=True)
class CompileOptions:
    """Values for the host tool's INC, DEFINE, OPTIMIZE and CCFLAGS."""

    include_dirs: Tuple[str, ...]
    defines: Tuple[str, ...]
    optimize: str
    flags: Tuple[str, ...]

    def include_args(self) -> List[str]:
        return [f"-I{path}" for path in self.include_dirs]

    def define_args(self) -> List[str]:
        return [f"-D{define}" for define in self.defines]


def compile_options_for(
    features: FeatureFlags,
    options: BuildOptions,
    libsass_version: str,
    plugins: PluginSet = DEFAULT_PLUGINS,
) -> CompileOptions:
    """
    Assemble compile options for one generation run.

    Args:
        features: Requested optional targets; plugin includes only with plugins
        options: Debug and profiling switches
        libsass_version: Version embedded as LIBSASS_VERSION
        plugins: Plugin declarations providing vendored include dirs

    Returns:
        CompileOptions
    """
    include_dirs = list(BASE_INCLUDE_DIRS)
    if features.build_plugin_set:
        include_dirs.extend(d for d in plugins.include_dirs() if d not in include_dirs)

    defines = options.defines()
    defines.append(f'LIBSASS_VERSION=\\"{libsass_version}\\"')

    return CompileOptions(
        include_dirs=tuple(include_dirs),
        defines=tuple(defines),
        optimize=options.optimize(),
        flags=tuple(options.compile_flags()),
    )
