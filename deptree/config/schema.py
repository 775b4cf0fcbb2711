"""Configuration schema definitions using Pydantic for validation.

This module provides strongly-typed configuration classes for a
dependency traversal. Using Pydantic ensures configuration errors are
caught before the traversal starts, with clear error messages.
"""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

from deptree.parsers.base import ConfigurationError

logger = logging.getLogger("deptree.config.schema")

DependencyFilter = Callable[[str, str], bool]


def load_ts_config(value: Any) -> Any:
    """Load a TypeScript config given as a path; pass mappings through.

    Args:
        value: None, a mapping, or a path to a tsconfig JSON file.

    Returns:
        The parsed mapping, or ``value`` unchanged when it is not a path.

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    if not isinstance(value, (str, Path)):
        return value

    path = Path(value)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot load TypeScript config {path}: {e}") from e

    logger.debug("Loaded TypeScript config from %s", path)
    return data


class ExtractorConfig(BaseModel):
    """Options forwarded to the specifier extractor.

    Attributes:
        include_core: Whether Node core modules (``fs``, ``node:path``) are
            reported. Traversals always force this off.
        skip_type_imports: Whether TypeScript ``import type`` statements are
            ignored.
    """

    include_core: bool = True
    skip_type_imports: bool = False

    model_config = {"extra": "allow"}  # Allow extra fields for custom extractors

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExtractorConfig":
        """Create configuration from dictionary."""
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


class ResolverConfig(BaseModel):
    """Module-system configuration passed through to the resolver.

    None of these settings is interpreted by the traversal itself.

    Attributes:
        require_config: RequireJS/AMD loader config (path or mapping), used
            to apply ``paths``/``baseUrl`` aliasing to AMD specifiers.
        webpack_config: Path to a webpack config, used to apply
            ``resolve.alias`` and ``resolve.modules``.
        node_modules_config: Options for entry-file selection inside
            ``node_modules``; ``{"entry": "module"}`` prefers the ``module``
            field of ``package.json`` over ``main``.
        ts_config: TypeScript compiler config (path or parsed mapping), used
            for ``compilerOptions.paths``/``baseUrl`` resolution.
    """

    require_config: Optional[Any] = None
    webpack_config: Optional[Any] = None
    node_modules_config: Optional[Dict[str, Any]] = None
    ts_config: Optional[Any] = None

    model_config = {"extra": "allow"}

    @field_validator("ts_config", mode="before")
    @classmethod
    def validate_ts_config(cls, v: Any) -> Any:
        """Load tsconfig paths into mappings."""
        return load_ts_config(v)


class DependencyTreeOptions(BaseModel):
    """Top-level options for one dependency traversal.

    Attributes:
        filename: Path of the module whose tree to traverse.
        directory: Directory containing all source files (alias ``root``).
        require_config: RequireJS config (alias ``config``).
        webpack_config: Webpack config path.
        node_modules_config: Entry-file options for ``node_modules``.
        ts_config: TypeScript config path or mapping.
        detective_config: Extractor options (alias ``detective``).
        visited: Pre-seeded memoization table, shared by reference.
        non_existent: Pre-seeded unresolved specifier list, shared by
            reference.
        is_list_form: Return the bundling-ordered list.
        is_package_form: Return the list of owning package roots.
        filter: Predicate ``(dependency_path, dependent_path) -> bool``;
            dependencies for which it is false are not traversed.
        extractor: Custom extractor instance (defaults to tree-sitter).
        resolver: Custom resolver instance (defaults to NodeResolver).
    """

    filename: str
    directory: str = Field(validation_alias=AliasChoices("directory", "root"))
    require_config: Optional[Any] = Field(
        default=None, validation_alias=AliasChoices("require_config", "config")
    )
    webpack_config: Optional[Any] = None
    node_modules_config: Optional[Dict[str, Any]] = None
    ts_config: Optional[Any] = None
    detective_config: ExtractorConfig = Field(
        default_factory=ExtractorConfig,
        validation_alias=AliasChoices("detective_config", "detective"),
    )
    visited: Optional[Any] = None
    non_existent: Optional[Any] = None
    is_list_form: bool = False
    is_package_form: bool = False
    filter: Optional[DependencyFilter] = None
    extractor: Optional[Any] = None
    resolver: Optional[Any] = None

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("filename", "directory")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        """Reject empty paths."""
        if not v:
            raise ValueError("must be a non-empty path")
        return v

    @field_validator("ts_config", mode="before")
    @classmethod
    def validate_ts_config(cls, v: Any) -> Any:
        """Load tsconfig paths into mappings."""
        return load_ts_config(v)

    @field_validator("visited")
    @classmethod
    def validate_visited(cls, v: Any) -> Any:
        """Keep the caller's table itself so updates are visible to them."""
        if v is not None and not isinstance(v, dict):
            raise ValueError("visited must be a dict of path -> subtree")
        return v

    @field_validator("non_existent")
    @classmethod
    def validate_non_existent(cls, v: Any) -> Any:
        """Keep the caller's list itself so updates are visible to them."""
        if v is not None and not isinstance(v, list):
            raise ValueError("non_existent must be a list of specifiers")
        return v

    @field_validator("extractor")
    @classmethod
    def validate_extractor(cls, v: Any) -> Any:
        """Check the extractor exposes ``extract``."""
        if v is not None and not callable(getattr(v, "extract", None)):
            raise ValueError("extractor must provide an extract() method")
        return v

    @field_validator("resolver")
    @classmethod
    def validate_resolver(cls, v: Any) -> Any:
        """Check the resolver exposes ``resolve``."""
        if v is not None and not callable(getattr(v, "resolve", None)):
            raise ValueError("resolver must provide a resolve() method")
        return v

    def resolver_config(self) -> ResolverConfig:
        """Collect the module-system configuration for the resolver."""
        return ResolverConfig(
            require_config=self.require_config,
            webpack_config=self.webpack_config,
            node_modules_config=self.node_modules_config,
            ts_config=self.ts_config,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyTreeOptions":
        """Create options from dictionary.

        Args:
            data: Options dictionary.

        Returns:
            DependencyTreeOptions instance.

        Raises:
            ValidationError: If the options are invalid.
        """
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to dictionary.

        Returns:
            Options as dictionary.
        """
        return self.model_dump()
