"""Tests for per-file dependency resolution."""

from pathlib import Path
from typing import List, Optional

from deptree.config.schema import DependencyTreeOptions, ExtractorConfig
from deptree.parsers.base import BaseExtractor, BaseResolver, ParseError, ResolveRequest
from deptree.runtime.context import TraversalContext
from deptree.runtime.resolution import get_dependencies


class _StaticExtractor(BaseExtractor):
    def __init__(self, specifiers: List[str], error: Optional[Exception] = None) -> None:
        self.specifiers = specifiers
        self.error = error
        self.configs: List[ExtractorConfig] = []

    def extract(self, file_path, config):
        self.configs.append(config)
        if self.error is not None:
            raise self.error
        return list(self.specifiers)


class _MappingResolver(BaseResolver):
    def __init__(self, mapping) -> None:
        self.mapping = mapping
        self.requests: List[ResolveRequest] = []

    def resolve(self, request):
        self.requests.append(request)
        return self.mapping.get(request.specifier)


def _context(tmp_path: Path, extractor, resolver, **kwargs) -> TraversalContext:
    options = DependencyTreeOptions(
        filename=str(tmp_path / "a.js"),
        directory=str(tmp_path),
        extractor=extractor,
        resolver=resolver,
        **kwargs,
    )
    return TraversalContext.from_options(options)


def test_resolved_paths_keep_source_order(tmp_path: Path) -> None:
    for name in ("b.js", "c.js"):
        (tmp_path / name).write_text("", encoding="utf-8")
    resolver = _MappingResolver({"./c": str(tmp_path / "c.js"), "./b": str(tmp_path / "b.js")})
    context = _context(tmp_path, _StaticExtractor(["./c", "./b"]), resolver)

    assert get_dependencies(context) == [str(tmp_path / "c.js"), str(tmp_path / "b.js")]
    assert context.non_existent == []


def test_request_carries_context(tmp_path: Path) -> None:
    resolver = _MappingResolver({})
    context = _context(
        tmp_path,
        _StaticExtractor(["lodash"]),
        resolver,
        require_config={"baseUrl": "js"},
    )

    get_dependencies(context)

    request = resolver.requests[0]
    assert request.specifier == "lodash"
    assert request.from_file == str(tmp_path / "a.js")
    assert request.directory == str(tmp_path)
    assert request.config.require_config == {"baseUrl": "js"}


def test_core_modules_are_always_excluded(tmp_path: Path) -> None:
    extractor = _StaticExtractor([])
    context = _context(
        tmp_path,
        extractor,
        _MappingResolver({}),
        detective_config={"include_core": True, "skip_type_imports": True},
    )

    get_dependencies(context)

    assert extractor.configs[0].include_core is False
    assert extractor.configs[0].skip_type_imports is True
    assert context.extractor_config.include_core is True


def test_unresolved_and_missing_paths_are_recorded(tmp_path: Path) -> None:
    (tmp_path / "b.js").write_text("", encoding="utf-8")
    resolver = _MappingResolver(
        {"./b": str(tmp_path / "b.js"), "./gone": str(tmp_path / "gone.js"), "empty": ""}
    )
    context = _context(
        tmp_path, _StaticExtractor(["nowhere", "./gone", "./b", "empty"]), resolver
    )

    assert get_dependencies(context) == [str(tmp_path / "b.js")]
    assert context.non_existent == ["nowhere", "./gone", "empty"]


def test_extraction_failure_yields_no_dependencies(tmp_path: Path) -> None:
    errors = (
        ParseError("bad syntax"),
        OSError("unreadable"),
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "bad"),
    )
    for error in errors:
        resolver = _MappingResolver({})
        context = _context(tmp_path, _StaticExtractor(["./b"], error=error), resolver)

        assert get_dependencies(context) == []
        assert resolver.requests == []
        assert context.non_existent == []


def test_unexpected_extractor_exception_yields_no_dependencies(tmp_path: Path) -> None:
    for error in (KeyError("bad token table"), RuntimeError("boom"), RecursionError()):
        resolver = _MappingResolver({})
        context = _context(tmp_path, _StaticExtractor(["./b"], error=error), resolver)

        assert get_dependencies(context) == []
        assert resolver.requests == []
