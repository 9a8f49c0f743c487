"""Build options.

Values chosen by the user (command line or sassmake.ini) that decide which
optional targets exist and how they are compiled and linked.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

# Linker flags enabling gcov instrumentation
PROFILING_LINK_FLAGS = ("-lgcov", "-fprofile-arcs", "-ftest-coverage")

# Compiler flags enabling gcov instrumentation
PROFILING_COMPILE_FLAGS = ("-fprofile-arcs", "-ftest-coverage")

# Warnings enabled for every translation unit
WARNING_FLAGS = ("-Wall", "-Wextra", "-Wno-unused-parameter")

RELEASE_OPTIMIZE = "-O3"
DEBUG_OPTIMIZE = "-O1"


@dataclass(frozen=True)
class FeatureFlags:
    """Optional targets requested for this run."""

    build_cli_tool: bool = False
    build_plugin_set: bool = False


class LinkMode(Enum):
    """How dependents link the core library."""

    SHARED = "shared"  # against the built library by path
    STATIC = "static"  # against the core object list directly

    @classmethod
    def parse(cls, value: str) -> "LinkMode":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid link mode '{value}' (expected 'shared' or 'static')") from None


@dataclass(frozen=True)
class BuildOptions:
    """Options that shape compile and link commands but not the graph itself."""

    link_mode: LinkMode = LinkMode.SHARED
    profiling: bool = False
    debug: bool = False
    extra_link_flags: Tuple[str, ...] = ()

    def link_flags(self) -> List[str]:
        flags = list(self.extra_link_flags)
        if self.profiling:
            flags.extend(f for f in PROFILING_LINK_FLAGS if f not in flags)
        return flags

    def compile_flags(self) -> List[str]:
        flags = list(WARNING_FLAGS)
        if self.profiling:
            flags.extend(PROFILING_COMPILE_FLAGS)
        return flags

    def optimize(self) -> str:
        """Optimization level; debug and profiling builds keep it low."""
        if self.debug or self.profiling:
            return DEBUG_OPTIMIZE
        return RELEASE_OPTIMIZE

    def defines(self) -> List[str]:
        return ["DEBUG"] if self.debug else []
