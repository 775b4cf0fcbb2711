"""Public API for computing dependency trees.

Exposes ``compute_dependencies`` plus the ``to_list`` and ``to_package``
variants. Every call accepts either ``DependencyTreeOptions`` or a plain
mapping with the same keys (aliases such as ``root``, ``config`` and
``detective`` included).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Union

from deptree.config.schema import DependencyTreeOptions
from deptree.runtime.context import OutputShape, Subtree, TraversalContext
from deptree.runtime.packages import get_package_id
from deptree.runtime.traverser import traverse

logger = logging.getLogger("deptree.runtime.api")

OptionsInput = Union[DependencyTreeOptions, Mapping[str, Any]]
DependencyResult = Union[Dict[str, Any], List[str]]


def compute_dependencies(options: OptionsInput) -> DependencyResult:
    """Recursively find all dependencies of a module, avoiding cycles.

    Unresolved specifiers are collected on ``options.non_existent`` (when
    the caller supplied that list) and de-duplicated in place.

    Args:
        options: Traversal options.

    Returns:
        DependencyResult: ``{filename: subtree}`` by default, a
        bundling-ordered list of files with ``is_list_form``, or a list of
        package roots with ``is_package_form``. A root file that does not
        exist yields ``{}`` or ``[]``.

    Raises:
        ValidationError: If the options are invalid.
    """
    options = _validate(options)
    context = TraversalContext.from_options(options)

    if not os.path.exists(context.filename):
        logger.debug("file %s does not exist", context.filename)
        return [] if context.shape is not OutputShape.TREE else {}

    context.package_id = get_package_id(context.filename)

    results = traverse(context)
    logger.debug("traversal complete: %s", results)

    dedupe_non_existent(context.non_existent)
    logger.debug("deduped list of non-existent partials: %s", context.non_existent)

    tree = shape_results(context, results)
    logger.debug("final tree: %s", tree)
    return tree


def to_list(options: OptionsInput) -> List[str]:
    """Return the bundling-ordered list of files.

    For any file in the list, all of that file's dependencies (direct or
    indirect) appear at lower indices, so the root file appears last. The
    list has no duplicates.
    """
    return compute_dependencies(_with_flag(options, "is_list_form"))


def to_package(options: OptionsInput) -> List[str]:
    """Return the roots of the installed packages whose files are used."""
    return compute_dependencies(_with_flag(options, "is_package_form"))


def shape_results(context: TraversalContext, results: Subtree) -> DependencyResult:
    """Convert the root's traversal result into the requested output.

    Args:
        context: Root traversal context.
        results: Result of traversing the root.

    Returns:
        DependencyResult: Output in the context's shape.
    """
    if context.shape is OutputShape.LIST:
        logger.debug("list form of results requested")
        return list(results)

    if context.shape is OutputShape.PACKAGE:
        logger.debug("package form of results requested")
        return [item for item in results if item != ""]

    logger.debug("object form of results requested")
    return {context.filename: results}


def dedupe_non_existent(non_existent: List[str]) -> None:
    """De-duplicate the list in place, keeping first occurrences.

    The caller may hold a reference to the list, so it is modified rather
    than replaced.
    """
    non_existent[:] = list(dict.fromkeys(non_existent))


def _validate(options: OptionsInput) -> DependencyTreeOptions:
    if isinstance(options, DependencyTreeOptions):
        return options
    return DependencyTreeOptions.from_dict(dict(options))


def _with_flag(options: OptionsInput, flag: str) -> DependencyTreeOptions:
    if isinstance(options, DependencyTreeOptions):
        return options.model_copy(update={flag: True})
    return DependencyTreeOptions.from_dict({**dict(options), flag: True})


__all__ = [
    "compute_dependencies",
    "to_list",
    "to_package",
    "shape_results",
    "dedupe_non_existent",
]
