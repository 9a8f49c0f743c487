"""
Source manifest parsing for the libsass core library.

The core library's translation units are not listed anywhere in this project.
They are read from libsass's own ``Makefile.conf``, which assigns them to two
make variables:

    SOURCES = \\
        ast.cpp \\
        context.cpp

    CSOURCES = cencode.c

Both assignments must be present and non-empty, otherwise the upstream
configuration format changed and the core library cannot be built.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

# Translation units the core library is built from
SOURCE_EXT_RE = re.compile(r"\.c(?:pp)?$")

# Reported when libsass/VERSION has not been generated yet
UNKNOWN_VERSION = "[na]"


class ManifestFormatError(Exception):
    """Raised when the upstream source manifest is missing or malformed."""

    pass


@dataclass(frozen=True)
class SourceManifest:
    """Source files of the core library, in manifest order."""

    c_sources: Tuple[str, ...]
    cpp_sources: Tuple[str, ...]
    source_root: str = "libsass/src"
    object_ext: str = ".o"

    def object_files(self) -> List[str]:
        """Get object files for all sources, C units first.

        Returns:
            List of object paths prefixed with the source root
        """
        objects = []
        for source in self.c_sources + self.cpp_sources:
            stem = SOURCE_EXT_RE.sub("", source)
            objects.append(f"{self.source_root}/{stem}{self.object_ext}")
        return objects


class SourceManifestParser:
    """
    Extracts the core library source lists from a make configuration text.

    Variable names are case-sensitive. An assignment may continue over several
    physical lines when a line ends with a backslash; tokens are separated by
    whitespace.
    """

    CPP_VARIABLE = "SOURCES"
    C_VARIABLE = "CSOURCES"

    def __init__(self, source_root: str = "libsass/src", object_ext: str = ".o"):
        """
        Initialize parser.

        Args:
            source_root: Directory prefix for the produced object files
            object_ext: Extension replacing the source extension
        """
        self.source_root = source_root.rstrip("/")
        self.object_ext = object_ext

    def parse(self, text: str) -> SourceManifest:
        """
        Parse the manifest text.

        Args:
            text: Full text of the make configuration

        Returns:
            SourceManifest with C and C++ sources

        Raises:
            ManifestFormatError: If a variable is missing, empty, or lists
                something that is not a C/C++ translation unit
        """
        cpp_sources = self._parse_variable(text, self.CPP_VARIABLE, "c++")
        c_sources = self._parse_variable(text, self.C_VARIABLE, "c")

        return SourceManifest(
            c_sources=tuple(c_sources),
            cpp_sources=tuple(cpp_sources),
            source_root=self.source_root,
            object_ext=self.object_ext,
        )

    def _parse_variable(self, text: str, name: str, language: str) -> List[str]:
        """Collect the unique tokens assigned to one variable."""
        pattern = re.compile(
            r"^[ \t]*" + re.escape(name) + r"[ \t]*=[ \t]*((?:.*\\\r?\n)*.*)",
            re.MULTILINE,
        )
        match = pattern.search(text)
        if not match:
            raise ManifestFormatError(
                f"Did not find {language} {name} in source manifest"
            )

        tokens = []
        for token in re.split(r"(?:\s|\\\r?\n)+", match.group(1)):
            if not token or token == "\\" or token in tokens:
                continue
            if not SOURCE_EXT_RE.search(token):
                raise ManifestFormatError(
                    f"{name} lists '{token}', which is not a C or C++ source file"
                )
            tokens.append(token)

        if not tokens:
            raise ManifestFormatError(f"{language} {name} in source manifest is empty")

        return tokens


def load_manifest(
    path: Union[str, Path], parser: Optional[SourceManifestParser] = None
) -> SourceManifest:
    """
    Read and parse a manifest file.

    Args:
        path: Path to libsass's Makefile.conf
        parser: Parser to use (default: SourceManifestParser())

    Returns:
        Parsed SourceManifest

    Raises:
        ManifestFormatError: If the file cannot be read or is malformed
    """
    path = Path(path)
    if not path.is_file():
        raise ManifestFormatError(f"{path} not found")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestFormatError(f"Failed to read {path}: {e}") from e

    return (parser or SourceManifestParser()).parse(text)


def load_libsass_version(path: Union[str, Path]) -> str:
    """
    Read the libsass version from its generated VERSION file.

    Args:
        path: Path to libsass/VERSION

    Returns:
        First line of the file, or UNKNOWN_VERSION if it doesn't exist
    """
    path = Path(path)
    if not path.is_file():
        logger.warning(f"Could not get version for libsass ({path} not found)")
        return UNKNOWN_VERSION

    lines = path.read_text(encoding="utf-8").splitlines()
    version = lines[0].strip() if lines else ""
    if not version:
        logger.warning(f"Could not get version for libsass ({path} is empty)")
        return UNKNOWN_VERSION

    logger.info(f"Detected libsass {version}")
    return version
