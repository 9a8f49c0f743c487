"""Toolchain classification for sassmake."""

from .platform_utils import PlatformDetector
from .profile import (
    CompilerFamily,
    OSClass,
    ToolchainProfile,
    UnsupportedToolchainError,
    classify_compiler,
    classify_os,
)

__all__ = [
    "PlatformDetector",
    "CompilerFamily",
    "OSClass",
    "ToolchainProfile",
    "UnsupportedToolchainError",
    "classify_compiler",
    "classify_os",
]
