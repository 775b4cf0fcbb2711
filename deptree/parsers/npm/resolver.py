"""Generic file-system resolver for JavaScript/TypeScript specifiers.

Handles:
- Relative and absolute specifiers (./foo, ../bar, /abs/baz)
- Package specifiers looked up in node_modules (lodash, @scope/pkg/sub)
- Directory imports through package.json entry fields or index files

Loader-specific configs (RequireJS, webpack, TypeScript paths) are
accepted on the request and ignored; supply a custom resolver to honour
them.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Iterable, List, Optional, Tuple

from deptree.parsers.base import BaseResolver, ResolveRequest

logger = logging.getLogger("deptree.parsers.npm.resolver")

PACKAGE_CONTAINER = "node_modules"
PACKAGE_MANIFEST = "package.json"
DEFAULT_ENTRY_FIELD = "main"

DEFAULT_EXTENSIONS = (
    ".js",
    ".jsx",
    ".mjs",
    ".cjs",
    ".ts",
    ".tsx",
    ".mts",
    ".cts",
    ".json",
)


class NodeResolver(BaseResolver):
    """Resolves specifiers the way Node looks up files and packages."""

    NAME = "node_resolver"

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self.extensions: Tuple[str, ...] = tuple(extensions)

    def resolve(self, request: ResolveRequest) -> Optional[str]:
        """Resolve a specifier to an absolute file path.

        Args:
            request: Specifier together with its resolution context.

        Returns:
            Optional[str]: Absolute path of an existing file, or None.
        """
        specifier = request.specifier
        if not specifier:
            return None

        base_dir = os.path.dirname(os.path.abspath(request.from_file))
        extensions = self._extensions_for(request.from_file)

        if specifier in (".", "..") or specifier.startswith(("./", "../")):
            target = os.path.normpath(os.path.join(base_dir, specifier))
            return self._resolve_path(target, extensions, DEFAULT_ENTRY_FIELD)

        if os.path.isabs(specifier):
            return self._resolve_path(
                os.path.normpath(specifier), extensions, DEFAULT_ENTRY_FIELD
            )

        entry_field = DEFAULT_ENTRY_FIELD
        if request.config is not None and request.config.node_modules_config:
            entry_field = request.config.node_modules_config.get(
                "entry", DEFAULT_ENTRY_FIELD
            )
        return self._resolve_package(specifier, base_dir, extensions, entry_field)

    def _extensions_for(self, from_file: str) -> List[str]:
        """Probe the dependent's own extension first."""
        own = os.path.splitext(from_file)[1].lower()
        ordered = [own] if own in self.extensions else []
        ordered.extend(ext for ext in self.extensions if ext != own)
        return ordered

    def _resolve_path(
        self, target: str, extensions: List[str], entry_field: str
    ) -> Optional[str]:
        """Resolve a path as a file first, then as a directory."""
        resolved = self._resolve_file(target, extensions)
        if resolved:
            return resolved
        if os.path.isdir(target):
            return self._resolve_directory(target, extensions, entry_field)
        return None

    def _resolve_file(self, target: str, extensions: List[str]) -> Optional[str]:
        if os.path.isfile(target):
            return os.path.abspath(target)
        for ext in extensions:
            candidate = target + ext
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)
        return None

    def _resolve_directory(
        self, directory: str, extensions: List[str], entry_field: str
    ) -> Optional[str]:
        entry = read_entry_point(directory, entry_field)
        if entry:
            entry_path = os.path.normpath(os.path.join(directory, entry))
            resolved = self._resolve_file(entry_path, extensions)
            if resolved:
                return resolved
            if os.path.isdir(entry_path):
                resolved = self._resolve_index(entry_path, extensions)
                if resolved:
                    return resolved
            logger.debug("entry %s of %s does not exist", entry, directory)
        return self._resolve_index(directory, extensions)

    def _resolve_index(self, directory: str, extensions: List[str]) -> Optional[str]:
        return self._resolve_file(os.path.join(directory, "index"), extensions)

    def _resolve_package(
        self,
        specifier: str,
        base_dir: str,
        extensions: List[str],
        entry_field: str,
    ) -> Optional[str]:
        """Look the package up in node_modules, walking up from base_dir."""
        name = package_name(specifier)
        current = base_dir
        while True:
            if os.path.basename(current) != PACKAGE_CONTAINER:
                modules_dir = os.path.join(current, PACKAGE_CONTAINER)
                if os.path.isdir(os.path.join(modules_dir, name)):
                    resolved = self._resolve_path(
                        os.path.join(modules_dir, specifier), extensions, entry_field
                    )
                    if resolved:
                        return resolved
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent

        logger.debug("package %s not found above %s", specifier, base_dir)
        return None


def package_name(specifier: str) -> str:
    """Extract the package name from a bare specifier.

    Args:
        specifier: Package specifier (lodash/get, @scope/pkg/sub).

    Returns:
        str: Package name (lodash, @scope/pkg).
    """
    parts = specifier.split("/")
    if specifier.startswith("@") and len(parts) >= 2:
        return f"{parts[0]}/{parts[1]}"
    return parts[0]


def read_entry_point(directory: str, entry_field: str) -> Optional[str]:
    """Read an entry field from a directory's package.json.

    Falls back to ``main`` when ``entry_field`` is absent.

    Args:
        directory: Directory possibly containing a package.json.
        entry_field: Preferred field name (``main``, ``module``, ...).

    Returns:
        Optional[str]: Relative entry path, or None.
    """
    manifest = os.path.join(directory, PACKAGE_MANIFEST)
    if not os.path.isfile(manifest):
        return None

    try:
        with open(manifest, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.debug("cannot read %s: %s", manifest, e)
        return None

    if not isinstance(data, dict):
        return None
    for field in (entry_field, DEFAULT_ENTRY_FIELD):
        value = data.get(field)
        if isinstance(value, str) and value:
            return value
    return None


__all__ = ["NodeResolver", "package_name", "read_entry_point"]
