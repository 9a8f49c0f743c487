"""
Plugin declarations.

Plugins are optional shared objects linked against the core library. Which
ones exist, what they are built from, and whether they can currently be built
is plain data here; the graph builder walks this list in declaration order.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

# Object suffix macro provided by the host build tool
OBJ_EXT = "$(OBJ_EXT)"


class PluginState(Enum):
    """Whether a declared plugin takes part in the build."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    PENDING = "pending"  # upstream API not yet available

    @classmethod
    def parse(cls, value: str) -> "PluginState":
        """Parse a state name (case-insensitive).

        Raises:
            ValueError: If the name is unknown
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            choices = ", ".join(state.value for state in cls)
            raise ValueError(f"Invalid plugin state '{value}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class CompileRule:
    """Explicit compile command for one object that needs non-default flags."""

    object_file: str
    arguments: Tuple[str, ...]


@dataclass(frozen=True)
class PluginDescriptor:
    """Declaration of one plugin.

    Object stems are given without extension; ``object_files()`` appends the
    host tool's object suffix.
    """

    name: str
    object_stems: Tuple[str, ...]
    state: PluginState = PluginState.ENABLED
    include_dirs: Tuple[str, ...] = ()
    compile_rules: Tuple[CompileRule, ...] = ()
    note: str = ""

    @property
    def variable(self) -> str:
        """Make variable prefix (e.g., 'GLOB')."""
        return self.name.upper().replace("-", "_")

    @property
    def output_dir(self) -> str:
        return f"$(INST_ARCHAUTODIR)/plugins/{self.name}"

    @property
    def output(self) -> str:
        return f"{self.output_dir}/{self.name}.$(SO)"

    @property
    def buildable(self) -> bool:
        return self.state is PluginState.ENABLED

    def object_files(self) -> List[str]:
        return [f"{stem}{OBJ_EXT}" for stem in self.object_stems]

    def with_state(self, state: PluginState) -> "PluginDescriptor":
        return replace(self, state=state)


@dataclass(frozen=True)
class PluginSet:
    """Ordered collection of plugin declarations."""

    plugins: Tuple[PluginDescriptor, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.plugins)

    def __len__(self) -> int:
        return len(self.plugins)

    def names(self) -> List[str]:
        return [plugin.name for plugin in self.plugins]

    def get(self, name: str) -> Optional[PluginDescriptor]:
        for plugin in self.plugins:
            if plugin.name == name:
                return plugin
        return None

    def include_dirs(self) -> List[str]:
        """Vendored include directories of all buildable plugins."""
        dirs: List[str] = []
        for plugin in self.plugins:
            if plugin.buildable:
                dirs.extend(d for d in plugin.include_dirs if d not in dirs)
        return dirs

    def with_states(self, states: Dict[str, PluginState]) -> "PluginSet":
        """
        Return a copy with some plugin states overridden.

        Args:
            states: Mapping of plugin name to new state

        Returns:
            New PluginSet in the same declaration order

        Raises:
            KeyError: If a name is not declared
        """
        unknown = set(states) - set(self.names())
        if unknown:
            raise KeyError(f"Unknown plugin(s): {', '.join(sorted(unknown))}")

        return PluginSet(tuple(
            plugin.with_state(states[plugin.name]) if plugin.name in states else plugin
            for plugin in self.plugins
        ))

    @classmethod
    def of(cls, plugins: Iterable[PluginDescriptor]) -> "PluginSet":
        return cls(tuple(plugins))


GLOB = PluginDescriptor(
    name="glob",
    object_stems=(
        "plugins/glob/src/glob",
        "plugins/glob/vendor/FS",
    ),
    include_dirs=("plugins/glob/vendor",),
    # readdir and friends are not visible with the default include path
    compile_rules=(
        CompileRule(
            object_file=f"plugins/glob/vendor/FS{OBJ_EXT}",
            arguments=(
                "$(CCCMD)", "$(CCCDLFLAGS)", "$(PASTHRU_DEFINE)", "$(DEFINE)",
                "-xc++", "-std=c++0x", "$*.cpp",
            ),
        ),
    ),
)

MATH = PluginDescriptor(
    name="math",
    object_stems=("plugins/math/src/math",),
)

DIGEST = PluginDescriptor(
    name="digest",
    object_stems=(
        "plugins/digest/src/digest",
        "plugins/digest/vendor/md5/md5",
        "plugins/digest/vendor/b64/cencode",
        "plugins/digest/vendor/crc/crc_16",
        "plugins/digest/vendor/crc/crc_32",
    ),
    state=PluginState.PENDING,
    include_dirs=(
        "plugins/digest/vendor",
        "plugins/digest/vendor/crc",
        "plugins/digest/vendor/md5",
    ),
    note="needs libsass C-API changes that are not yet released",
)

DEFAULT_PLUGINS = PluginSet((GLOB, MATH, DIGEST))
