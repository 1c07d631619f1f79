"""Decode and verify JSON Web Tokens."""

from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

__version__: str
"""The version string of jwtcheck (PEP 440 / SemVer compatible)."""

try:
    __version__ = version("jwtcheck")
except PackageNotFoundError:
    # package is not installed
    __version__ = "0.0.0"
