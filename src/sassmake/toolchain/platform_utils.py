"""Platform Detection Utilities.

This module resolves the two external inputs of toolchain classification:
the identifier of the operating system the build runs on, and the identity of
the C compiler that will be used for linking.

Compiler resolution order:
    - explicit override (command line or sassmake.ini)
    - the CC environment variable
    - the compiler the running interpreter was built with
    - 'cl' on Windows, 'cc' elsewhere
"""

import os
import platform
import sys
import sysconfig
from typing import Mapping, Optional


class PlatformDetector:
    """Detects the current platform and default compiler."""

    @staticmethod
    def detect_os_id() -> str:
        """Get the OS identifier (e.g., 'linux', 'darwin', 'win32')."""
        return sys.platform

    @staticmethod
    def detect_compiler(
        override: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> str:
        """Resolve the compiler identity string.

        Args:
            override: Explicitly requested compiler
            environ: Environment to consult (default: os.environ)

        Returns:
            Compiler name or path, possibly followed by arguments
        """
        if override:
            return override

        env = os.environ if environ is None else environ
        if env.get("CC", "").strip():
            return env["CC"].strip()

        configured = sysconfig.get_config_var("CC")
        if configured:
            return str(configured).strip()

        return "cl" if sys.platform == "win32" else "cc"

    @staticmethod
    def get_platform_info() -> dict:
        """Get detailed information about the current platform."""
        return {
            "system": platform.system(),
            "machine": platform.machine(),
            "os_id": PlatformDetector.detect_os_id(),
            "python_version": platform.python_version(),
            "compiler": PlatformDetector.detect_compiler(),
        }
