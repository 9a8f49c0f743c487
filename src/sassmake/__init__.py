"""sassmake - Makefile targets for libsass, sassc and the libsass plugins."""

__version__ = "0.1.0"
