"""Identify the installed package a file belongs to."""

import logging
import os
from typing import Callable

from deptree.parsers.npm.resolver import PACKAGE_CONTAINER, PACKAGE_MANIFEST

logger = logging.getLogger("deptree.runtime.packages")


def get_package_id(
    filename: str,
    exists: Callable[[str], bool] = os.path.exists,
) -> str:
    """Get the root directory of the package whose files are used.

    Walks from ``filename`` towards ``node_modules`` and returns the
    deepest directory that directly owns a ``package.json``.

    Args:
        filename: Absolute path of a file.
        exists: Existence check, injectable for tests.

    Returns:
        str: Absolute package root, or ``""`` for files outside
        ``node_modules`` and files with no owning manifest.
    """
    segments = filename.split(os.sep)
    if PACKAGE_CONTAINER in segments:
        while segments and segments[-1] != PACKAGE_CONTAINER:
            candidate = os.sep.join(segments)
            if exists(candidate + os.sep + PACKAGE_MANIFEST):
                return candidate
            segments.pop()

    logger.debug("package.json does not exist for %s", filename)
    return ""


__all__ = ["get_package_id"]
