"""Specifier extractor for JavaScript/TypeScript files.

Uses tree-sitter to parse JS/TS source files and extract import/require
specifiers in source order.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import tree_sitter_javascript as ts_javascript
import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from deptree.config.schema import ExtractorConfig
from deptree.parsers.base import BaseExtractor, ParseError

logger = logging.getLogger("deptree.parsers.npm.extractor")

JS_SUFFIXES = (".js", ".mjs", ".cjs", ".jsx")
TS_SUFFIXES = (".ts", ".mts", ".cts")
TSX_SUFFIXES = (".tsx",)

# Node.js built-in modules
BUILTIN_MODULES = frozenset({
    "assert",
    "async_hooks",
    "buffer",
    "child_process",
    "cluster",
    "console",
    "constants",
    "crypto",
    "dgram",
    "diagnostics_channel",
    "dns",
    "domain",
    "events",
    "fs",
    "http",
    "http2",
    "https",
    "inspector",
    "module",
    "net",
    "os",
    "path",
    "perf_hooks",
    "process",
    "punycode",
    "querystring",
    "readline",
    "repl",
    "stream",
    "string_decoder",
    "sys",
    "timers",
    "tls",
    "trace_events",
    "tty",
    "url",
    "util",
    "v8",
    "vm",
    "wasi",
    "worker_threads",
    "zlib",
})


def is_core_module(specifier: str) -> bool:
    """Check whether a specifier names a Node.js built-in module.

    Args:
        specifier: Raw specifier (``fs``, ``fs/promises``, ``node:path``).

    Returns:
        bool: True for built-in modules.
    """
    if specifier.startswith("node:"):
        return True
    return specifier.split("/", 1)[0] in BUILTIN_MODULES


class TreeSitterExtractor(BaseExtractor):
    """Extractor for JavaScript/TypeScript files.

    Extracts:
    - ES6 imports: import x from 'module', import 'module'
    - Re-exports: export * from 'module'
    - CommonJS requires: const x = require('module')
    - Dynamic imports: import('module')
    - TypeScript import-require: import x = require('module')
    """

    NAME = "tree_sitter_extractor"

    def __init__(self) -> None:
        """Initialize the tree-sitter parsers for JS, TS and TSX."""
        self._parsers: Dict[str, Parser] = {
            "js": Parser(Language(ts_javascript.language())),
            "ts": Parser(Language(ts_typescript.language_typescript())),
            "tsx": Parser(Language(ts_typescript.language_tsx())),
        }
        logger.debug("TreeSitterExtractor: tree-sitter parsers initialized")

    def extract(self, file_path: str, config: ExtractorConfig) -> List[str]:
        """Extract specifiers from a JavaScript/TypeScript file.

        Args:
            file_path: Path to the source file.
            config: Extraction options.

        Returns:
            List[str]: Unique specifiers in source order.

        Raises:
            ParseError: If the file type is unsupported or has syntax errors.
            OSError: If the file cannot be read.
        """
        path = Path(file_path)
        if not self.can_handle_file(path):
            raise ParseError(f"Unsupported file type: {path.suffix or path.name}")
        parser = self._parser_for(path)

        tree = parser.parse(path.read_bytes())
        root = tree.root_node
        if root.has_error:
            raise ParseError(f"Syntax error in {path}")

        specifiers: List[str] = []
        self._extract_from_tree(root, specifiers, config.skip_type_imports)

        unique = list(dict.fromkeys(specifiers))
        if not config.include_core:
            unique = [spec for spec in unique if not is_core_module(spec)]

        logger.debug("extracted %d specifiers from %s", len(unique), path)
        return unique

    def can_handle_file(self, file_path: Path) -> bool:
        """Check if this extractor can handle the given file.

        Args:
            file_path: Path to file to check.

        Returns:
            bool: True if file extension matches supported types.
        """
        return self._parser_for(file_path) is not None

    def _parser_for(self, path: Path) -> Optional[Parser]:
        suffix = path.suffix.lower()
        if suffix in JS_SUFFIXES:
            return self._parsers["js"]
        if suffix in TS_SUFFIXES:
            return self._parsers["ts"]
        if suffix in TSX_SUFFIXES:
            return self._parsers["tsx"]
        return None

    def _extract_from_tree(
        self,
        root: Node,
        specifiers: List[str],
        skip_type_imports: bool,
    ) -> None:
        """Collect specifiers from the syntax tree in source order.

        Walks with an explicit stack so deeply nested sources do not hit
        the interpreter's recursion limit.

        Args:
            root: Tree-sitter root node.
            specifiers: List to append specifiers to.
            skip_type_imports: Whether to ignore ``import type`` statements.
        """
        stack: List[Node] = [root]
        while stack:
            node = stack.pop()
            node_type = node.type

            # import x from 'module' / export * from 'module'
            if node_type in ("import_statement", "export_statement"):
                if skip_type_imports and self._is_type_only(node):
                    continue
                self._append_string(node.child_by_field_name("source"), specifiers)

            # TypeScript: import x = require('module')
            elif node_type == "import_require_clause":
                self._append_string(node.child_by_field_name("source"), specifiers)

            # require('module') / import('module')
            elif node_type == "call_expression":
                func = node.child_by_field_name("function")
                if func is not None and (
                    func.type == "import"
                    or (func.type == "identifier" and func.text == b"require")
                ):
                    args = node.child_by_field_name("arguments")
                    if args is not None and args.named_child_count > 0:
                        self._append_string(args.named_children[0], specifiers)

            # reversed so the first child is popped first
            stack.extend(reversed(node.children))

    @staticmethod
    def _is_type_only(node: Node) -> bool:
        return any(child.type == "type" for child in node.children)

    @staticmethod
    def _append_string(node: Optional[Node], specifiers: List[str]) -> None:
        value = _string_value(node)
        if value:
            specifiers.append(value)


def _string_value(node: Optional[Any]) -> Optional[str]:
    """Extract the value of a string literal node, without quotes.

    Template strings with substitutions are not static and yield None.
    """
    if node is None or node.type not in ("string", "template_string"):
        return None
    if any(child.type == "template_substitution" for child in node.children):
        return None

    text = node.text.decode("utf-8", errors="replace")
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"', "`"):
        return text[1:-1]
    return None


__all__ = ["TreeSitterExtractor", "BUILTIN_MODULES", "is_core_module"]
