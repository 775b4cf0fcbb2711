"""Post-order depth-first traversal of the dependency graph.

The memoization table on the context doubles as the cycle breaker: a
file gets an empty placeholder entry before its children are explored,
so a dependency edge that loops back to it returns the placeholder
instead of recursing.

Tree shape replaces the placeholder with the finished mapping once the
children are done, so a cyclic back-edge keeps the empty mapping it
received (``{a: {b: {a: {}}}}`` for ``a <-> b``). List and package
shapes extend the placeholder list in place, so holders of that list see
the final contents once the file is finished.
"""

import logging
from typing import Dict

from deptree.runtime.context import OutputShape, Subtree, TraversalContext
from deptree.runtime.packages import get_package_id
from deptree.runtime.resolution import get_dependencies

logger = logging.getLogger("deptree.runtime.traverser")


def traverse(context: TraversalContext) -> Subtree:
    """Return the dependency subtree rooted at the context's file.

    In list shape the result is a post-order list of file paths: every
    file appears after all of its (non-cyclic) dependencies, the file
    itself comes last and there are no duplicates. Package shape is the
    same walk collecting package ids instead of file paths.

    Args:
        context: Traversal context of the file.

    Returns:
        Subtree: Mapping (tree shape) or ordered unique list (list and
        package shapes). This is the object stored in ``context.visited``.
    """
    logger.debug("traversing %s", context.filename)

    if context.filename in context.visited:
        logger.debug("already visited %s", context.filename)
        return context.visited[context.filename]

    dependencies = get_dependencies(context)
    logger.debug("resolved all dependencies: %s", dependencies)

    # Must precede the recursion below
    context.visited[context.filename] = context.empty_subtree()

    if context.filter is not None:
        logger.debug("unfiltered number of dependencies: %d", len(dependencies))
        dependencies = [
            path for path in dependencies if context.filter(path, context.filename)
        ]
        logger.debug("filtered number of dependencies: %d", len(dependencies))

    if context.shape is OutputShape.TREE:
        subtree: Dict[str, Subtree] = {}
        for path in dependencies:
            subtree[path] = traverse(_child_context(context, path))
        context.visited[context.filename] = subtree
        return subtree

    collected: Dict[str, None] = {}
    for path in dependencies:
        collected.update(dict.fromkeys(traverse(_child_context(context, path))))

    if context.shape is OutputShape.LIST:
        collected.setdefault(context.filename, None)
    else:
        collected.setdefault(context.package_id, None)

    placeholder = context.visited[context.filename]
    placeholder.extend(collected)
    return placeholder


def _child_context(context: TraversalContext, path: str) -> TraversalContext:
    child = context.clone()
    child.filename = path
    child.package_id = get_package_id(path)
    return child


__all__ = ["traverse"]
