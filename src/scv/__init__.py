"""SCV - Student Code Viewer, an animated terminal UI for class repositories."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("scv")
except PackageNotFoundError:
    __version__ = "unknown"
