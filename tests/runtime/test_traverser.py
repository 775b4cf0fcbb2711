"""Tests for the post-order dependency traversal."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from deptree.parsers.base import BaseExtractor, BaseResolver, ParseError, ResolveRequest
from deptree.runtime.api import compute_dependencies, to_list, to_package


class _GraphExtractor(BaseExtractor):
    """Extractor serving specifiers from a ``{relative_path: [specs]}`` map."""

    def __init__(self, root: Path, graph: Dict[str, List[str]]) -> None:
        self.root = root
        self.graph = graph
        self.calls: List[str] = []

    def extract(self, file_path, config):
        self.calls.append(file_path)
        specs = self.graph.get(os.path.relpath(file_path, self.root))
        if specs is None:
            raise ParseError(f"cannot parse {file_path}")
        return list(specs)


class _RelativeResolver(BaseResolver):
    """Resolves every specifier relative to the dependent; ``missing*`` fails."""

    def resolve(self, request: ResolveRequest) -> Optional[str]:
        if request.specifier.startswith("missing"):
            return None
        return os.path.normpath(
            os.path.join(os.path.dirname(request.from_file), request.specifier)
        )


def _write_files(root: Path, paths) -> None:
    for rel in paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def _options(tmp_path: Path, graph: Dict[str, List[str]], root: str = "a.js", **extra):
    _write_files(tmp_path, graph)
    options = {
        "filename": str(tmp_path / root),
        "directory": str(tmp_path),
        "extractor": _GraphExtractor(tmp_path, graph),
        "resolver": _RelativeResolver(),
    }
    options.update(extra)
    return options


def _p(tmp_path: Path, rel: str) -> str:
    return str(tmp_path / rel)


def test_root_without_dependencies(tmp_path: Path) -> None:
    """A leaf root yields [root] as a list and {root: {}} as a tree."""
    graph = {"a.js": []}

    assert to_list(_options(tmp_path, graph)) == [_p(tmp_path, "a.js")]
    assert compute_dependencies(_options(tmp_path, graph)) == {_p(tmp_path, "a.js"): {}}


def test_tree_form_nests_dependencies(tmp_path: Path) -> None:
    graph = {
        "a.js": ["./b.js", "./c.js"],
        "b.js": ["./d.js"],
        "c.js": [],
        "d.js": [],
    }

    tree = compute_dependencies(_options(tmp_path, graph))

    assert tree == {
        _p(tmp_path, "a.js"): {
            _p(tmp_path, "b.js"): {_p(tmp_path, "d.js"): {}},
            _p(tmp_path, "c.js"): {},
        }
    }


def test_list_form_is_post_order(tmp_path: Path) -> None:
    """Every dependency precedes its dependents; the root is last."""
    graph = {
        "a.js": ["./b.js", "./c.js"],
        "b.js": ["./d.js"],
        "c.js": ["./d.js", "./e.js"],
        "d.js": ["./e.js"],
        "e.js": [],
    }

    order = to_list(_options(tmp_path, graph))

    assert order == [_p(tmp_path, name) for name in ("e.js", "d.js", "b.js", "c.js", "a.js")]
    assert len(order) == len(set(order))
    for dependent, specs in graph.items():
        for spec in specs:
            assert order.index(_p(tmp_path, spec[2:])) < order.index(_p(tmp_path, dependent))


def test_cycle_terminates_in_list_form(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js"], "b.js": ["./a.js"]}

    order = to_list(_options(tmp_path, graph))

    assert order == [_p(tmp_path, "b.js"), _p(tmp_path, "a.js")]


def test_cycle_back_edge_is_empty_in_tree_form(tmp_path: Path) -> None:
    """The a -> b -> a edge keeps the empty placeholder mapping."""
    graph = {"a.js": ["./b.js"], "b.js": ["./a.js"]}
    a, b = _p(tmp_path, "a.js"), _p(tmp_path, "b.js")

    tree = compute_dependencies(_options(tmp_path, graph))

    assert tree == {a: {b: {a: {}}}}


def test_each_file_is_extracted_once(tmp_path: Path) -> None:
    graph = {
        "a.js": ["./b.js", "./c.js"],
        "b.js": ["./c.js"],
        "c.js": ["./a.js"],
    }
    options = _options(tmp_path, graph)

    to_list(options)

    calls = options["extractor"].calls
    assert sorted(calls) == sorted(_p(tmp_path, name) for name in graph)


def test_filter_rejecting_everything_leaves_root(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js"], "b.js": ["./c.js"], "c.js": []}
    seen = []

    def reject(dependency: str, dependent: str) -> bool:
        seen.append((dependency, dependent))
        return False

    order = to_list(_options(tmp_path, graph, filter=reject))

    assert order == [_p(tmp_path, "a.js")]
    assert seen == [(_p(tmp_path, "b.js"), _p(tmp_path, "a.js"))]


def test_filter_prunes_subtrees(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js", "./c.js"], "b.js": ["./d.js"], "c.js": [], "d.js": []}

    tree = compute_dependencies(
        _options(tmp_path, graph, filter=lambda dep, _: not dep.endswith("b.js"))
    )

    assert tree == {_p(tmp_path, "a.js"): {_p(tmp_path, "c.js"): {}}}


def test_specifiers_resolving_to_same_file_count_once(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js", "./lib/../b.js"], "b.js": [], "lib/x.js": []}

    order = to_list(_options(tmp_path, graph))

    assert order == [_p(tmp_path, "b.js"), _p(tmp_path, "a.js")]


def test_unresolved_specifiers_are_deduped_in_first_seen_order(tmp_path: Path) -> None:
    graph = {
        "a.js": ["missing-one", "./b.js", "./gone.js"],
        "b.js": ["missing-two", "missing-one"],
    }
    non_existent: List[str] = []
    options = _options(tmp_path, graph, non_existent=non_existent)

    order = to_list(options)

    assert order == [_p(tmp_path, "b.js"), _p(tmp_path, "a.js")]
    assert non_existent == ["missing-one", "./gone.js", "missing-two"]


def test_extraction_failure_makes_leaf(tmp_path: Path) -> None:
    graph = {"a.js": ["./broken.js", "./b.js"], "b.js": []}
    _write_files(tmp_path, ["broken.js"])

    order = to_list(_options(tmp_path, graph))

    assert order == [_p(tmp_path, name) for name in ("broken.js", "b.js", "a.js")]


class _CrashingExtractor(_GraphExtractor):
    """Raises an arbitrary exception for ``crash*`` files."""

    def extract(self, file_path, config):
        if os.path.basename(file_path).startswith("crash"):
            raise KeyError("bad token table")
        return super().extract(file_path, config)


def test_unexpected_extractor_error_makes_leaf(tmp_path: Path) -> None:
    graph = {"a.js": ["./crash.js", "./b.js"], "b.js": [], "crash.js": []}
    options = _options(tmp_path, graph)
    options["extractor"] = _CrashingExtractor(tmp_path, graph)

    order = to_list(options)

    assert order == [_p(tmp_path, name) for name in ("crash.js", "b.js", "a.js")]


@pytest.mark.parametrize(
    "flags, expected",
    [({}, {}), ({"is_list_form": True}, []), ({"is_package_form": True}, [])],
)
def test_missing_root_yields_empty_result(tmp_path: Path, flags, expected) -> None:
    extractor = _GraphExtractor(tmp_path, {})
    options = {
        "filename": str(tmp_path / "nope.js"),
        "directory": str(tmp_path),
        "extractor": extractor,
        "resolver": _RelativeResolver(),
        **flags,
    }

    assert compute_dependencies(options) == expected
    assert extractor.calls == []


def test_package_form_lists_owning_packages(tmp_path: Path) -> None:
    graph = {
        "a.js": ["./node_modules/x/index.js", "./node_modules/y/lib/y.js", "./b.js"],
        "b.js": ["./node_modules/x/index.js"],
        "node_modules/x/index.js": ["./util.js"],
        "node_modules/x/util.js": [],
        "node_modules/y/lib/y.js": [],
    }
    options = _options(tmp_path, graph)
    _write_files(tmp_path, ["node_modules/x/package.json", "node_modules/y/package.json"])

    packages = to_package(options)

    assert packages == [_p(tmp_path, "node_modules/x"), _p(tmp_path, "node_modules/y")]
    assert "" not in packages


def test_package_form_with_cycle_inside_package(tmp_path: Path) -> None:
    graph = {
        "a.js": ["./node_modules/x/index.js"],
        "node_modules/x/index.js": ["./util.js"],
        "node_modules/x/util.js": ["./index.js"],
    }
    options = _options(tmp_path, graph)
    _write_files(tmp_path, ["node_modules/x/package.json"])

    assert to_package(options) == [_p(tmp_path, "node_modules/x")]


def test_preseeded_visited_short_circuits(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js"], "b.js": ["./c.js"], "c.js": []}
    visited = {str(tmp_path / "b.js"): [str(tmp_path / "cached.js"), str(tmp_path / "b.js")]}
    options = _options(tmp_path, graph, visited=visited)

    order = to_list(options)

    assert order == [_p(tmp_path, "cached.js"), _p(tmp_path, "b.js"), _p(tmp_path, "a.js")]
    assert _p(tmp_path, "b.js") not in options["extractor"].calls
    assert visited[_p(tmp_path, "a.js")] == order


def test_list_memo_entries_hold_finished_subtrees(tmp_path: Path) -> None:
    graph = {"a.js": ["./b.js"], "b.js": ["./c.js"], "c.js": []}
    visited: Dict[str, List[str]] = {}

    to_list(_options(tmp_path, graph, visited=visited))

    assert visited == {
        _p(tmp_path, "c.js"): [_p(tmp_path, "c.js")],
        _p(tmp_path, "b.js"): [_p(tmp_path, "c.js"), _p(tmp_path, "b.js")],
        _p(tmp_path, "a.js"): [_p(tmp_path, n) for n in ("c.js", "b.js", "a.js")],
    }
