"""
Makefile target generation for sassmake.

This module provides:
- Structured link recipes per toolchain
- The target graph model and its builder
- Makefile rendering
- The one-shot postamble cache used by the host's Makefile hooks
"""

from .compile_options import CompileOptions, compile_options_for
from .graph_builder import TargetGraphBuilder, build_target_graph
from .orchestrator import GenerationSettings, MakefileOrchestrator
from .makefile_renderer import MakefileRenderer
from .postamble import MakefileHooks, PostambleCache
from .recipes import LinkRecipe, RecipeFactory
from .targets import BuildTarget, InvalidTargetError, TargetGraph, TargetKind

__all__ = [
    "CompileOptions",
    "compile_options_for",
    "TargetGraphBuilder",
    "build_target_graph",
    "GenerationSettings",
    "MakefileOrchestrator",
    "MakefileRenderer",
    "MakefileHooks",
    "PostambleCache",
    "LinkRecipe",
    "RecipeFactory",
    "BuildTarget",
    "InvalidTargetError",
    "TargetGraph",
    "TargetKind",
]
