"""Base extractor and resolver interfaces.

Every traversal delegates to two collaborators:
1. Extractor - Lists the raw import/require specifiers of one source file
2. Resolver - Maps one specifier plus context to an absolute file path

Neither collaborator is allowed to abort a traversal. Extractors signal
malformed input with ``ParseError``; resolvers signal "not found" by
returning ``None``.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from deptree.config.schema import ExtractorConfig, ResolverConfig

logger = logging.getLogger("deptree.parsers.base")


# =============================================================================
# Custom Exception Hierarchy
# =============================================================================

class RecoverableError(Exception):
    """Base class for recoverable business errors.

    These errors indicate expected failure conditions that can be handled
    gracefully by skipping the current item and continuing processing.
    """
    pass


class ConfigurationError(RecoverableError):
    """Configuration input error.

    Raised when a configuration file (e.g., tsconfig.json, deptree.toml) is
    missing, malformed or contains invalid data.
    """
    pass


class ParseError(RecoverableError):
    """Source code parsing error - the file contributes no dependencies.

    Raised when a source code file cannot be parsed due to syntax errors
    or unsupported constructs.
    """
    pass


@dataclass
class ResolveRequest:
    """Arguments handed to a resolver for one specifier.

    Args:
        specifier: Raw specifier as written in source (``./util``, ``lodash``).
        from_file: Absolute path of the file containing the specifier.
        directory: Root directory of the traversal.
        config: Module-system configuration passed through untouched.
    """

    specifier: str
    from_file: str
    directory: str
    config: Optional["ResolverConfig"] = None


class BaseExtractor(ABC):
    """Base class for specifier extractors."""

    NAME: str = "base"

    @abstractmethod
    def extract(self, file_path: str, config: "ExtractorConfig") -> List[str]:
        """List the raw specifiers of a source file.

        Args:
            file_path: Absolute path of the file to read.
            config: Extraction options (core module handling, type imports).

        Returns:
            List[str]: Specifiers in source order.

        Raises:
            ParseError: If the file cannot be parsed.
        """
        raise NotImplementedError


class BaseResolver(ABC):
    """Base class for specifier resolvers."""

    NAME: str = "base"

    @abstractmethod
    def resolve(self, request: ResolveRequest) -> Optional[str]:
        """Resolve a specifier to an absolute path.

        Args:
            request: Specifier together with its resolution context.

        Returns:
            Optional[str]: Absolute path, or None when nothing matches.
        """
        raise NotImplementedError


__all__ = [
    "RecoverableError",
    "ConfigurationError",
    "ParseError",
    "ResolveRequest",
    "BaseExtractor",
    "BaseResolver",
]
