"""Tests for doccompiler.pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from doccompiler.compiler import CompilerPass, discover_passes
from doccompiler.config import load_config
from doccompiler.errors import CompilerPassError
from doccompiler.models import ApiSet, DocumentationSet, ElementKind, NamespaceNode, PackageNode
from doccompiler.pipeline import Compiler
from tests._fixtures.api_set_builder import ApiSetBuilder, member


class RecordingPass(CompilerPass):
    """Test double that records the order in which passes run."""

    def __init__(self, name: str, priority: int, calls: list[str]) -> None:
        self.description = name
        self.priority = priority
        self._calls = calls

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        self._calls.append(self.description)
        return documentation_set


class FailingPass(CompilerPass):
    priority = 50
    description = "Explode"

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        raise KeyError("boom")


def test_compiler_runs_passes_by_descending_priority() -> None:
    calls: list[str] = []
    compiler = Compiler(
        [
            RecordingPass("low", 10, calls),
            RecordingPass("high", 100, calls),
            RecordingPass("middle", 50, calls),
        ]
    )

    compiler.compile(ApiSet())

    assert calls == ["high", "middle", "low"]


def test_failing_pass_halts_pipeline() -> None:
    calls: list[str] = []
    compiler = Compiler([RecordingPass("before", 100, calls), FailingPass(), RecordingPass("after", 10, calls)])

    with pytest.raises(CompilerPassError) as excinfo:
        compiler.compile(ApiSet())

    assert calls == ["before"]
    assert excinfo.value.description == "Explode"
    assert isinstance(excinfo.value.__cause__, KeyError)


def test_default_pipeline_builds_all_structures(api_builder: ApiSetBuilder) -> None:
    file = api_builder.file("src/Models/User.php", source="<?php class User {}")
    user = api_builder.element(
        file,
        ElementKind.CLASS,
        "\\App\\Models\\User",
        namespace="\\App\\Models",
        tags={"package": "Core", "subpackage": "Models"},
        members=[member(ElementKind.METHOD, "\\App\\Models\\User::save()")],
    )
    api_set = api_builder.build()

    Compiler().compile(api_set)

    elements = api_set.indexes.get("elements")
    assert elements is not None
    assert elements["\\App\\Models\\User"] is user
    assert "\\App\\Models\\User::save()" in elements
    assert isinstance(elements["~\\App\\Models"], NamespaceNode)
    assert isinstance(user.namespace, NamespaceNode)
    assert user.namespace.fqsen == "\\App\\Models"
    assert isinstance(user.package, PackageNode)
    assert user.package.fqsen == "\\Core\\Models"
    assert file.source is None
    for name in ("elements", "namespaces", "packages", "constants", "functions", "classes", "interfaces", "traits", "enums"):
        assert name in api_set.indexes


def test_compile_applies_config_settings(tmp_path: Path, api_builder: ApiSetBuilder) -> None:
    (tmp_path / ".doccompiler.yml").write_text(
        "settings:\n  include_source: true\ncompiler:\n  passes: [elements-index, remove-source]\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    api_builder.file("src/a.php", source="<?php")
    api_set = api_builder.build()

    compiler = Compiler.from_config(config)
    compiler.compile(api_set, config)

    assert [p.description for p in compiler.passes] == [
        'Build "elements" index',
        "Removing sourcecode from file descriptors",
    ]
    assert api_set.settings["include-source"] is True
    assert api_set.files["src/a.php"].source == "<?php"
    assert "namespaces" not in api_set.indexes


def test_default_compiler_uses_discovered_passes() -> None:
    expected = [type(p) for p in discover_passes()]

    assert sorted(type(p).__name__ for p in Compiler().passes) == sorted(t.__name__ for t in expected)


def test_from_config_applies_logging_settings(tmp_path: Path, api_builder: ApiSetBuilder) -> None:
    (tmp_path / ".doccompiler.yml").write_text(
        "logging:\n  level: debug\n  file: logs/compile.log\ncompiler:\n  passes: [elements-index, namespace-tree]\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    api_builder.element(api_builder.file("src/a.php"), ElementKind.CLASS, "\\A\\B", namespace="\\A")

    compiler = Compiler.from_config(config)
    compiler.compile(api_builder.build(), config)

    package_logger = logging.getLogger("doccompiler")
    assert package_logger.level == logging.DEBUG
    for handler in package_logger.handlers:
        handler.flush()
    text = (tmp_path / "logs" / "compile.log").read_text(encoding="utf-8")
    assert 'INFO doccompiler.compiler: Build "elements" index' in text
    assert "Built namespace tree with 2 namespaces (0 unparented)" in text
