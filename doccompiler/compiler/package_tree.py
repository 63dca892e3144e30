"""Pass that rebuilds the package tree from the @package and @subpackage tags."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from ..errors import IndexTypeMismatchError
from ..fqsen import ROOT, SEPARATOR
from ..logging import get_logger
from ..models import ApiSet, DocumentationSet, Element, ElementKind, PackageNode
from .base import CompilerPass

UNKNOWN_PACKAGE = "UNKNOWN"

_PACKAGE_SOURCE_KINDS = (
    ElementKind.CONSTANT,
    ElementKind.FUNCTION,
    ElementKind.CLASS,
    ElementKind.INTERFACE,
    ElementKind.TRAIT,
)


class PackageTreeBuilder(CompilerPass):
    """Builds the "packages" index, independent of lexical namespaces."""

    name = "package-tree"
    priority = 9001
    description = 'Build "packages" index'

    def __init__(self) -> None:
        self.logger = get_logger("compiler.package_tree")

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        if not isinstance(documentation_set, ApiSet):
            return documentation_set

        root = PackageNode.root()
        documentation_set.package = root
        packages: Dict[str, object] = {ROOT: root}
        documentation_set.indexes.set("packages", packages)

        for file in documentation_set.files.values():
            self.add_elements_to_package(packages, [file])
            for kind in _PACKAGE_SOURCE_KINDS:
                self.add_elements_to_package(packages, file.members_of(kind))

        self.logger.debug("Built package tree with %d packages", len(packages))
        return documentation_set

    def add_elements_to_package(
        self, packages: Dict[str, object], elements: Iterable[Element]
    ) -> None:
        """Bind each element to the package named by its tags, creating it when missing."""
        for element in elements:
            package_name = package_name_for(element)
            index_name = ROOT + package_name
            package = _lookup_package(packages, index_name)
            if package is None:
                package = self.create_package_tree(packages, package_name)

            element.package = package
            package.collection_for(element.kind).append(element)

    def create_package_tree(self, packages: Dict[str, object], package_name: str) -> PackageNode:
        """Create every missing package along ``package_name`` and return the last one.

        The tree is walked from the root with a pointer that advances into the
        matching child, so no recursion is needed.
        """
        pointer = _lookup_package(packages, ROOT)
        if pointer is None:
            pointer = PackageNode.root()
            packages[ROOT] = pointer

        fqnn = ""
        for part in package_name.split(SEPARATOR):
            fqnn += SEPARATOR + part
            key = part or UNKNOWN_PACKAGE
            child = pointer.children.get(key)
            if child is None:
                child = PackageNode(name=part, fqsen=fqnn)
                pointer.add_child(key, child)
                packages[fqnn] = child
                self.logger.debug("Created package %s", fqnn)
            pointer = child
        return pointer


def package_name_for(element: Element) -> str:
    """Return the package path of ``element`` without leading or trailing separators.

    The first ``package`` tag names the package; the first ``subpackage`` tag,
    when present, is appended as a child segment.
    """
    package_tag = element.first_tag("package")
    package_name = package_tag.description if package_tag is not None else ""

    subpackage_tag = element.first_tag("subpackage")
    if subpackage_tag is not None:
        package_name += SEPARATOR + subpackage_tag.description

    return package_name.strip().strip(SEPARATOR)


def _lookup_package(packages: Dict[str, object], key: str) -> Optional[PackageNode]:
    entry = packages.get(key)
    if entry is None:
        return None
    if not isinstance(entry, PackageNode):
        raise IndexTypeMismatchError("packages", key, PackageNode, entry)
    return entry


__all__ = ["PackageTreeBuilder", "UNKNOWN_PACKAGE", "package_name_for"]
