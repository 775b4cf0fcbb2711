"""Traversal runtime: context, package identification, traversal and API."""

from deptree.runtime.api import (
    compute_dependencies,
    dedupe_non_existent,
    shape_results,
    to_list,
    to_package,
)
from deptree.runtime.context import OutputShape, Subtree, TraversalContext
from deptree.runtime.packages import get_package_id
from deptree.runtime.resolution import get_dependencies
from deptree.runtime.traverser import traverse

__all__ = [
    "compute_dependencies",
    "dedupe_non_existent",
    "shape_results",
    "to_list",
    "to_package",
    "OutputShape",
    "Subtree",
    "TraversalContext",
    "get_package_id",
    "get_dependencies",
    "traverse",
]
