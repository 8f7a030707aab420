"""pydepth: render resolved package dependency trees as text or JSON, with summaries."""

from importlib.metadata import version, PackageNotFoundError

from pydepth.api import (
    build_tree,
    list_known_packages,
    summarize_tree,
)
from pydepth.core.resolver import ResolutionError
from pydepth.core.summary import Summary
from pydepth.core.tree import DependencyNode

__all__ = [
    "build_tree",
    "list_known_packages",
    "summarize_tree",
    "DependencyNode",
    "ResolutionError",
    "Summary",
    "__version__",
]

try:
    __version__ = version("pydepth")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed as package
