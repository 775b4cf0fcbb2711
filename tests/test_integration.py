"""End-to-end traversal with the default tree-sitter extractor and resolver."""

from __future__ import annotations

import json
from pathlib import Path

from rich.console import Console

from deptree import compute_dependencies, to_list, to_package
from deptree.export.render import build_rich_tree, render_result


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _project(root: Path) -> dict:
    files = {
        "index": _write(
            root / "src" / "index.js",
            "import { helper } from './helper';\n"
            "import lodash from 'lodash';\n"
            "const fs = require('fs');\n"
            "const broken = require('./broken');\n"
            "const missing = require('./missing');\n",
        ),
        "helper": _write(
            root / "src" / "helper.ts",
            "import type { Opts } from './types';\n"
            "export { cycle } from './cycle';\n"
            "import get from 'lodash/get';\n",
        ),
        "types": _write(root / "src" / "types.ts", "export interface Opts {}\n"),
        "cycle": _write(root / "src" / "cycle.js", "import './helper';\nexport const cycle = 1;\n"),
        "broken": _write(root / "src" / "broken.js", "const = ;\n"),
        "lodash": _write(root / "node_modules" / "lodash" / "lodash.js", "module.exports = {};\n"),
        "get": _write(root / "node_modules" / "lodash" / "get.js", "module.exports = require('./lodash');\n"),
    }
    _write(root / "node_modules" / "lodash" / "package.json", json.dumps({"main": "lodash.js"}))
    return {name: str(path) for name, path in files.items()}


def test_list_form_end_to_end(tmp_path: Path) -> None:
    files = _project(tmp_path)
    non_existent = []

    order = to_list(
        {
            "filename": files["index"],
            "directory": str(tmp_path / "src"),
            "non_existent": non_existent,
        }
    )

    assert order == [
        files["types"],
        files["cycle"],
        files["lodash"],
        files["get"],
        files["helper"],
        files["broken"],
        files["index"],
    ]
    assert non_existent == ["./missing"]


def test_skip_type_imports(tmp_path: Path) -> None:
    files = _project(tmp_path)

    order = to_list(
        {
            "filename": files["index"],
            "directory": str(tmp_path / "src"),
            "detective": {"skip_type_imports": True},
        }
    )

    assert files["types"] not in order
    assert order[-1] == files["index"]


def test_package_form_end_to_end(tmp_path: Path) -> None:
    files = _project(tmp_path)

    packages = to_package({"filename": files["index"], "directory": str(tmp_path / "src")})

    assert packages == [str(tmp_path / "node_modules" / "lodash")]


def test_tree_form_and_rendering(tmp_path: Path) -> None:
    files = _project(tmp_path)

    tree = compute_dependencies({"filename": files["index"], "root": str(tmp_path)})

    helper = tree[files["index"]][files["helper"]]
    assert helper[files["cycle"]] == {files["helper"]: {}}
    assert tree[files["index"]][files["broken"]] == {}

    console = Console(record=True, width=200)
    render_result(tree, console, directory=str(tmp_path))
    text = console.export_text()
    assert os_sep_join("src", "helper.ts") in text
    assert os_sep_join("node_modules", "lodash", "lodash.js") in text
    assert build_rich_tree({}).label is not None


def os_sep_join(*parts: str) -> str:
    return str(Path(*parts))
