"""Deptree - dependency trees of JavaScript/TypeScript modules."""

from deptree.config.schema import DependencyTreeOptions, ExtractorConfig, ResolverConfig
from deptree.parsers.base import ConfigurationError, ParseError, RecoverableError
from deptree.runtime.api import compute_dependencies, to_list, to_package
from deptree.runtime.context import OutputShape, TraversalContext

__all__ = [
    "compute_dependencies",
    "to_list",
    "to_package",
    "DependencyTreeOptions",
    "ExtractorConfig",
    "ResolverConfig",
    "OutputShape",
    "TraversalContext",
    "ConfigurationError",
    "ParseError",
    "RecoverableError",
]
