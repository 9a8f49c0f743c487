"""Toolchain classification.

Every platform or compiler conditional of the build lives here. The rest of
the package only looks at the capability flags of a ToolchainProfile, never at
raw OS or compiler strings.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class UnsupportedToolchainError(Exception):
    """Raised when a requested feature cannot be linked with the toolchain."""

    def __init__(self, feature: str, profile: "ToolchainProfile"):
        self.feature = feature
        self.profile = profile
        super().__init__(
            f"{feature} is not available with {profile.compiler_family.value} "
            f"toolchain '{profile.compiler}' on {profile.os_class.value} ({profile.os_id})"
        )


class CompilerFamily(Enum):
    GNU = "gnu"
    MSVC = "msvc"
    UNKNOWN = "unknown"


class OSClass(Enum):
    POSIX = "posix"
    WINDOWS = "windows"


# Driver names after stripping any target triple prefix and version suffix
GNU_DRIVERS = {"gcc", "g++", "cc", "c++", "clang", "clang++"}
MSVC_DRIVERS = {"cl", "clang-cl"}

_VERSION_SUFFIX_RE = re.compile(r"-\d+(?:\.\d+)*$")
_ARGUMENTS_RE = re.compile(r"\s+[-/]")


@dataclass(frozen=True)
class ToolchainProfile:
    """Resolved compiler family and OS class for one generation run."""

    compiler: str
    os_id: str
    compiler_family: CompilerFamily
    os_class: OSClass
    is_linux: bool = False

    @classmethod
    def classify(cls, compiler: str, os_id: str) -> "ToolchainProfile":
        """Classify a compiler identity and OS identifier.

        Args:
            compiler: Compiler name or path, optionally followed by arguments
                (e.g., 'gcc', '/usr/bin/x86_64-linux-gnu-gcc-12', 'cl.exe')
            os_id: OS identifier ('linux', 'darwin', 'MSWin32', 'win32', ...)

        Returns:
            ToolchainProfile
        """
        family = classify_compiler(compiler)
        os_class = classify_os(os_id)
        profile = cls(
            compiler=compiler,
            os_id=os_id,
            compiler_family=family,
            os_class=os_class,
            is_linux=os_id.strip().lower().startswith("linux"),
        )

        if family is CompilerFamily.UNKNOWN:
            logger.warning(f"Unknown compiler '{compiler}', trying GNU-style linking anyway")
        else:
            logger.info(f"Detected {family.value} compiler '{compiler}' on {os_class.value}")

        return profile

    def supports_plugin_linking(self) -> bool:
        return self.compiler_family is not CompilerFamily.MSVC

    def supports_shared_linking(self) -> bool:
        return self.compiler_family is not CompilerFamily.MSVC

    @property
    def is_windows(self) -> bool:
        return self.os_class is OSClass.WINDOWS

    @property
    def emits_import_library(self) -> bool:
        """Whether shared objects also produce a MinGW import library."""
        return self.is_windows and self.compiler_family is not CompilerFamily.MSVC

    @property
    def needs_libdl(self) -> bool:
        """Whether executables must link libdl to load plugins."""
        return self.is_linux

    def require_plugin_linking(self, feature: str = "plugin linking") -> None:
        if not self.supports_plugin_linking():
            raise UnsupportedToolchainError(feature, self)

    def require_shared_linking(self, feature: str = "shared library linking") -> None:
        if not self.supports_shared_linking():
            raise UnsupportedToolchainError(feature, self)


def compiler_driver_name(compiler: str) -> str:
    """Reduce a compiler identity to its bare driver name.

    Example:
        >>> compiler_driver_name('/usr/bin/x86_64-w64-mingw32-gcc-12 -m64')
        'gcc'
    """
    # Arguments start at the first "-" or "/" option; paths may contain spaces
    command = _ARGUMENTS_RE.split(compiler.strip(), maxsplit=1)[0].strip().strip("\"'")
    if not command:
        return ""

    name = command.replace("\\", "/").rsplit("/", 1)[-1].lower()
    if name.endswith(".exe"):
        name = name[:-4]
    name = _VERSION_SUFFIX_RE.sub("", name)

    if name in MSVC_DRIVERS:
        return name
    # Cross compilers carry a target triple prefix
    return name.rsplit("-", 1)[-1] if "-" in name else name


def classify_compiler(compiler: str) -> CompilerFamily:
    name = compiler_driver_name(compiler)
    if name in MSVC_DRIVERS:
        return CompilerFamily.MSVC
    if name in GNU_DRIVERS:
        return CompilerFamily.GNU
    return CompilerFamily.UNKNOWN


def classify_os(os_id: str) -> OSClass:
    """Map an OS identifier to its class. Cygwin counts as POSIX."""
    if os_id.strip().lower() in ("mswin32", "win32", "win64", "windows", "nt"):
        return OSClass.WINDOWS
    return OSClass.POSIX
