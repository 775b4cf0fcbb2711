"""NPM ecosystem collaborators.

This package provides the default collaborators for Node.js/npm
projects:
- JavaScript/TypeScript specifier extraction with tree-sitter
- File-system resolution of relative and node_modules specifiers
"""

from deptree.parsers.npm.extractor import TreeSitterExtractor
from deptree.parsers.npm.resolver import NodeResolver

__all__ = [
    "TreeSitterExtractor",
    "NodeResolver",
]
