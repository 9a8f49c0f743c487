"""
Unit tests for platform and compiler detection.
"""

import sys
from unittest.mock import patch

from sassmake.toolchain.platform_utils import PlatformDetector


class TestPlatformDetector:
    """Test suite for PlatformDetector."""

    def test_override_wins(self):
        assert PlatformDetector.detect_compiler("clang", environ={"CC": "gcc"}) == "clang"

    def test_cc_environment(self):
        assert PlatformDetector.detect_compiler(environ={"CC": " gcc-12 "}) == "gcc-12"

    def test_interpreter_compiler(self):
        with patch("sysconfig.get_config_var", return_value="x86_64-linux-gnu-gcc -pthread"):
            compiler = PlatformDetector.detect_compiler(environ={})

        assert compiler == "x86_64-linux-gnu-gcc -pthread"

    def test_fallback(self):
        with patch("sysconfig.get_config_var", return_value=None):
            compiler = PlatformDetector.detect_compiler(environ={"CC": "  "})

        assert compiler == ("cl" if sys.platform == "win32" else "cc")

    def test_os_id(self):
        assert PlatformDetector.detect_os_id() == sys.platform

    def test_platform_info(self):
        info = PlatformDetector.get_platform_info()

        assert info["os_id"] == sys.platform
        assert info["compiler"]
