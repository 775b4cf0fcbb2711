"""Traversal context for one dependency computation.

A context carries the per-file state of a traversal (current file and
its package id) together with references to the state shared by the
whole traversal: the memoization table, the unresolved specifier list
and the collaborator instances. ``clone()`` copies the former and shares
the latter, so every context derived from one top-level call reads and
writes the same table and list.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from deptree.config.schema import (
    DependencyFilter,
    DependencyTreeOptions,
    ExtractorConfig,
    ResolverConfig,
)
from deptree.parsers.base import BaseExtractor, BaseResolver

logger = logging.getLogger("deptree.runtime.context")

# Tree shape: path -> subtree. List/package shape: ordered unique paths.
Subtree = Union[Dict[str, Any], List[str]]


class OutputShape(str, Enum):
    """Shape of a traversal result."""

    TREE = "tree"
    LIST = "list"
    PACKAGE = "package"


@dataclass
class TraversalContext:
    """Per-file traversal state plus references to shared state.

    Args:
        filename: Absolute path of the file being traversed.
        directory: Root directory of the traversal.
        shape: Output shape selected for the whole traversal.
        resolver_config: Module-system configuration for the resolver.
        extractor_config: Options for the extractor.
        filter: Optional ``(dependency_path, dependent_path) -> bool``.
        package_id: Package root owning ``filename``, ``""`` when none.
        visited: Shared memoization table (path -> subtree).
        non_existent: Shared list of unresolved specifiers.
        extractor: Shared extractor collaborator.
        resolver: Shared resolver collaborator.
    """

    filename: str
    directory: str
    shape: OutputShape = OutputShape.TREE
    resolver_config: ResolverConfig = field(default_factory=ResolverConfig)
    extractor_config: ExtractorConfig = field(default_factory=ExtractorConfig)
    filter: Optional[DependencyFilter] = None
    package_id: str = ""
    visited: Dict[str, Subtree] = field(default_factory=dict)
    non_existent: List[str] = field(default_factory=list)
    extractor: Optional[BaseExtractor] = None
    resolver: Optional[BaseResolver] = None

    @property
    def is_list_form(self) -> bool:
        return self.shape is OutputShape.LIST

    @property
    def is_package_form(self) -> bool:
        return self.shape is OutputShape.PACKAGE

    def clone(self) -> "TraversalContext":
        """Copy the per-file fields; share the table, list and collaborators."""
        return dataclasses.replace(self)

    def empty_subtree(self) -> Subtree:
        """Return an empty result in the selected shape."""
        if self.shape is OutputShape.TREE:
            return {}
        return []

    @classmethod
    def from_options(cls, options: DependencyTreeOptions) -> "TraversalContext":
        """Build the root context from validated options.

        Args:
            options: Validated traversal options.

        Returns:
            TraversalContext for the root file. The package id is left
            empty; it is computed once the root is known to exist.
        """
        if options.is_list_form:
            shape = OutputShape.LIST
        elif options.is_package_form:
            shape = OutputShape.PACKAGE
        else:
            shape = OutputShape.TREE

        extractor = options.extractor
        if extractor is None:
            from deptree.parsers.npm.extractor import TreeSitterExtractor

            extractor = TreeSitterExtractor()

        resolver = options.resolver
        if resolver is None:
            from deptree.parsers.npm.resolver import NodeResolver

            resolver = NodeResolver()

        filename = os.path.abspath(options.filename)
        logger.debug("given filename: %s", options.filename)
        logger.debug("resolved filename: %s", filename)

        return cls(
            filename=filename,
            directory=options.directory,
            shape=shape,
            resolver_config=options.resolver_config(),
            extractor_config=options.detective_config,
            filter=options.filter,
            visited=options.visited if options.visited is not None else {},
            non_existent=(
                options.non_existent if options.non_existent is not None else []
            ),
            extractor=extractor,
            resolver=resolver,
        )


__all__ = ["OutputShape", "Subtree", "TraversalContext"]
