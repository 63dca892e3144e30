"""Compiler pass implementations and pass selection."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple, Type

from .base import CompilerPass
from .elements_index import ElementsIndexBuilder
from .namespace_tree import NamespaceTreeBuilder
from .package_tree import PackageTreeBuilder
from .remove_source import RemoveSourcecode

BUILTIN_PASSES: Tuple[Type[CompilerPass], ...] = (
    ElementsIndexBuilder,
    NamespaceTreeBuilder,
    PackageTreeBuilder,
    RemoveSourcecode,
)


def discover_passes(enabled: Sequence[str] | None = None) -> List[CompilerPass]:
    """Instantiate the built-in passes, limited to ``enabled`` names when given.

    Names are matched case-insensitively against ``CompilerPass.name``.
    """
    if enabled is None:
        return [pass_class() for pass_class in BUILTIN_PASSES]

    wanted = {name.lower() for name in enabled}
    known = {pass_class.name for pass_class in BUILTIN_PASSES}
    missing = wanted - known
    if missing:
        raise ValueError(f"Unknown compiler passes requested: {', '.join(sorted(missing))}")

    return [pass_class() for pass_class in BUILTIN_PASSES if pass_class.name in wanted]


def check_unique(passes: Iterable[CompilerPass]) -> List[CompilerPass]:
    """Return ``passes`` as a list, rejecting two passes with one priority or description."""
    checked: List[CompilerPass] = []
    priorities: dict[int, CompilerPass] = {}
    descriptions: dict[str, CompilerPass] = {}
    for compiler_pass in passes:
        clash = priorities.get(compiler_pass.priority)
        if clash is not None:
            raise ValueError(
                f"Compiler passes {type(clash).__name__} and {type(compiler_pass).__name__} "
                f"share priority {compiler_pass.priority}"
            )
        clash = descriptions.get(compiler_pass.description)
        if clash is not None:
            raise ValueError(
                f"Compiler passes {type(clash).__name__} and {type(compiler_pass).__name__} "
                f"share description {compiler_pass.description!r}"
            )
        priorities[compiler_pass.priority] = compiler_pass
        descriptions[compiler_pass.description] = compiler_pass
        checked.append(compiler_pass)
    return checked


__all__ = [
    "BUILTIN_PASSES",
    "CompilerPass",
    "ElementsIndexBuilder",
    "NamespaceTreeBuilder",
    "PackageTreeBuilder",
    "RemoveSourcecode",
    "check_unique",
    "discover_passes",
]
