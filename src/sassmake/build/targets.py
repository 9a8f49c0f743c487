"""
Build target model.

A BuildTarget is one link output (library, executable or plugin) together with
the objects it is linked from, the targets it depends on, and its link recipe.
A TargetGraph is the ordered, immutable set of targets of one generation run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..config.plugins import CompileRule, PluginDescriptor
from .recipes import LinkRecipe


class InvalidTargetError(Exception):
    """Raised when a target or graph violates its structural invariants."""

    pass


class TargetKind(Enum):
    LIBRARY = "library"
    EXECUTABLE = "executable"
    PLUGIN = "plugin"


@dataclass(frozen=True)
class BuildTarget:
    """One link output."""

    name: str
    kind: TargetKind
    variable: str                      # Make variable prefix (e.g., LIBSASS)
    output: str                        # Output path pattern
    objects: Tuple[str, ...]
    recipe: LinkRecipe
    dependencies: Tuple["BuildTarget", ...] = ()
    optional: bool = False
    side_outputs: Tuple[str, ...] = ()  # Extra files the link produces
    compile_rules: Tuple[CompileRule, ...] = ()

    def __post_init__(self):
        if not self.objects:
            raise InvalidTargetError(f"Target '{self.name}' has no object files")

        if self.kind is TargetKind.LIBRARY:
            if self.dependencies:
                raise InvalidTargetError(
                    f"Library target '{self.name}' must not depend on other targets"
                )
        elif not any(dep.kind is TargetKind.LIBRARY for dep in self.dependencies):
            raise InvalidTargetError(
                f"{self.kind.value.capitalize()} target '{self.name}' "
                "is missing its dependency on the core library"
            )

    @property
    def objects_variable(self) -> str:
        return f"{self.variable}_OBJ"

    @property
    def output_variable(self) -> str:
        suffix = "EXE" if self.kind is TargetKind.EXECUTABLE else "LIB"
        return f"{self.variable}_{suffix}"

    def depends_on(self, other: "BuildTarget") -> bool:
        return any(dep.name == other.name for dep in self.dependencies)

    def artifacts(self) -> List[str]:
        """Files this target leaves behind: objects, output, side outputs."""
        return list(self.objects) + [self.output] + list(self.side_outputs)


def collect_cleanup(targets: Iterable[BuildTarget]) -> Tuple[str, ...]:
    """Collect the artifacts of all targets in order, without duplicates."""
    files: List[str] = []
    for target in targets:
        for path in target.artifacts():
            if path not in files:
                files.append(path)
    return tuple(files)


@dataclass(frozen=True)
class TargetGraph:
    """
    Ordered targets of one generation run plus their cleanup file list.

    The order is canonical: the core library first, then the CLI executable
    if present, then plugins in declaration order. Every target appears after
    all targets it depends on.
    """

    targets: Tuple[BuildTarget, ...]
    cleanup_files: Tuple[str, ...]
    skipped_plugins: Tuple[PluginDescriptor, ...] = ()

    def __post_init__(self):
        if not self.targets:
            raise InvalidTargetError("Target graph is empty")
        if self.targets[0].kind is not TargetKind.LIBRARY:
            raise InvalidTargetError(
                f"Target graph must start with the core library, not '{self.targets[0].name}'"
            )

        seen: List[str] = []
        for target in self.targets:
            if target.name in seen:
                raise InvalidTargetError(f"Duplicate target '{target.name}'")
            for dep in target.dependencies:
                if dep.name not in seen:
                    raise InvalidTargetError(
                        f"Target '{target.name}' is ordered before its dependency '{dep.name}'"
                    )
            seen.append(target.name)

    @property
    def core(self) -> BuildTarget:
        return self.targets[0]

    def names(self) -> List[str]:
        return [target.name for target in self.targets]

    def get(self, name: str) -> Optional[BuildTarget]:
        for target in self.targets:
            if target.name == name:
                return target
        return None

    def dependents(self, target: BuildTarget) -> List[BuildTarget]:
        return [t for t in self.targets if t.depends_on(target)]

    def leaves(self) -> List[BuildTarget]:
        """Targets nothing else depends on, in canonical order."""
        return [t for t in self.targets if not self.dependents(t)]
