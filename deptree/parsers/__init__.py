"""Parsers package.

Extractor and resolver interfaces; the default npm implementations live
in ``deptree.parsers.npm``.
"""

from deptree.parsers.base import (
    BaseExtractor,
    BaseResolver,
    ConfigurationError,
    ParseError,
    RecoverableError,
    ResolveRequest,
)

__all__ = [
    "BaseExtractor",
    "BaseResolver",
    "ConfigurationError",
    "ParseError",
    "RecoverableError",
    "ResolveRequest",
]
