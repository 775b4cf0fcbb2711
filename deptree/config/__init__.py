"""Configuration schema and loading for deptree."""

from .schema import (
    DependencyFilter,
    DependencyTreeOptions,
    ExtractorConfig,
    ResolverConfig,
)
from .loader import load_options_config

__all__ = [
    "DependencyFilter",
    "DependencyTreeOptions",
    "ExtractorConfig",
    "ResolverConfig",
    "load_options_config",
]
