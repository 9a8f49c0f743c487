"""
Integration test for CLI command invocation.

Runs sassmake in a subprocess against a project laid out like a libsass
checkout. Requires the package to be installed.
"""

import subprocess
import sys
from pathlib import Path

import pytest

MANIFEST = """\
SOURCES = \\
\tast.cpp \\
\tcontext.cpp \\
\tfunctions.cpp

CSOURCES = cencode.c
"""


def run_sassmake(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "sassmake", *args],
        capture_output=True,
        text=True,
        timeout=60,
    )


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    libsass = tmp_path / "libsass"
    libsass.mkdir()
    (libsass / "Makefile.conf").write_text(MANIFEST)
    (tmp_path / "sassmake.ini").write_text("[sassmake]\nsassc = yes\ncompiler = gcc\n")
    return tmp_path


@pytest.mark.integration
class TestCLIIntegration:
    """CLI integration tests."""

    def test_cli_help_invocation(self):
        result = run_sassmake("--help")

        assert result.returncode == 0
        assert "generate" in result.stdout

    def test_generate_full_fragment(self, project_dir):
        result = run_sassmake("generate", str(project_dir))

        assert result.returncode == 0, result.stderr
        out = result.stdout
        assert "LIBSASS_OBJ = libsass/src/cencode.o libsass/src/ast.o" in out
        assert "$(SASSC_EXE): $(LIBSASS_LIB) $(SASSC_OBJ)" in out
        assert "pure_all :: $(SASSC_EXE) $(GLOB_LIB) $(MATH_LIB)" in out
        assert "DIGEST" not in out

    def test_generate_is_reproducible(self, project_dir):
        first = run_sassmake("generate", str(project_dir))
        second = run_sassmake("generate", str(project_dir))

        assert first.stdout == second.stdout

    def test_msvc_plugins_fail(self, project_dir):
        result = run_sassmake("generate", str(project_dir), "--compiler", "cl")

        assert result.returncode == 1
        assert result.stdout == ""
        assert "plugin linking" in result.stderr
