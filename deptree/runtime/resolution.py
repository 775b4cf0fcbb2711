"""Dependency resolution for a single file.

Combines the extractor and resolver collaborators: file -> ordered list
of absolute dependency paths. Specifiers that cannot be resolved are
recorded on the shared unresolved list instead of failing the traversal.
"""

import logging
import os
from typing import List

from deptree.parsers.base import ResolveRequest
from deptree.runtime.context import TraversalContext

logger = logging.getLogger("deptree.runtime.resolution")


def get_dependencies(context: TraversalContext) -> List[str]:
    """Return the resolved dependencies of the context's current file.

    Args:
        context: Traversal context of the file.

    Returns:
        List[str]: Absolute paths of existing dependencies, in source order.
    """
    extractor_config = context.extractor_config.model_copy(
        update={"include_core": False}
    )

    try:
        dependencies = context.extractor.extract(context.filename, extractor_config)
    except Exception as e:  # any extractor failure makes the file a leaf
        logger.debug("error getting dependencies of %s: %s", context.filename, e)
        return []

    logger.debug("extracted %d dependencies: %s", len(dependencies), dependencies)

    resolved: List[str] = []
    for dep in dependencies:
        result = context.resolver.resolve(
            ResolveRequest(
                specifier=dep,
                from_file=context.filename,
                directory=context.directory,
                config=context.resolver_config,
            )
        )

        if not result:
            logger.debug("skipping an empty filepath resolution for partial: %s", dep)
            context.non_existent.append(dep)
            continue

        if not os.path.exists(result):
            logger.debug(
                "skipping non-empty but non-existent resolution: %s for partial: %s",
                result,
                dep,
            )
            context.non_existent.append(dep)
            continue

        resolved.append(result)

    return resolved


__all__ = ["get_dependencies"]
