"""Pass that rebuilds the namespace tree from the elements found in files.

The tree is rebuilt from scratch on every run; only the files collection of a
documentation set is authoritative, so nothing about namespaces is persisted
between builds.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..errors import IndexTypeMismatchError, InvalidFqsenError
from ..fqsen import ROOT, SEPARATOR, Fqsen
from ..logging import get_logger
from ..models import (
    NAMESPACE_INDEX_PREFIX,
    NAMESPACE_MEMBER_KINDS,
    ApiSet,
    DocumentationSet,
    Element,
    NamespaceNode,
)
from .base import CompilerPass


class NamespaceTreeBuilder(CompilerPass):
    """Builds the "namespaces" index and registers every namespace in "elements"."""

    name = "namespace-tree"
    priority = 9000
    description = 'Build "namespaces" index and add namespaces to "elements"'

    def __init__(self) -> None:
        self.logger = get_logger("compiler.namespace_tree")

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        if not isinstance(documentation_set, ApiSet):
            return documentation_set

        root = NamespaceNode.root()
        documentation_set.namespace = root
        elements = documentation_set.indexes.fetch("elements", {})
        namespaces: Dict[str, Any] = {ROOT: root}
        documentation_set.indexes.set("namespaces", namespaces)
        elements[namespace_index_key(root)] = root

        for file in documentation_set.files.values():
            for kind in NAMESPACE_MEMBER_KINDS:
                self.add_elements_to_namespace(namespaces, file.members_of(kind))

        orphans = 0
        for node in list(namespaces.values()):
            if node.is_root or node.parent is not None:
                continue
            if not self.add_to_parent_namespace(namespaces, elements, node):
                orphans += 1

        self.logger.debug(
            "Built namespace tree with %d namespaces (%d unparented)", len(namespaces), orphans
        )
        return documentation_set

    def add_elements_to_namespace(
        self, namespaces: Dict[str, Any], elements: List[Element]
    ) -> None:
        """Bind each element to its namespace node, creating the node when missing.

        The element's textual namespace is replaced by the node and the element
        is appended to the node collection matching its kind.
        """
        for element in elements:
            namespace_name = element.namespace_path
            # The assembler occasionally reports no namespace for global elements.
            if namespace_name == "":
                namespace_name = ROOT

            namespace = _lookup_namespace(namespaces, namespace_name)
            if namespace is None:
                namespace = NamespaceNode.from_path(namespace_name)
                namespaces[namespace_name] = namespace

            element.namespace = namespace
            namespace.collection_for(element.kind).append(element)

    def add_to_parent_namespace(
        self,
        namespaces: Dict[str, Any],
        elements: Dict[str, Any],
        namespace: NamespaceNode,
    ) -> bool:
        """Link ``namespace`` into the tree, creating missing ancestors on the way up.

        Returns False when an ancestor path cannot be parsed; the chain built so far
        stays registered but cannot be reached from the root.
        """
        elements[namespace_index_key(namespace)] = namespace
        current = namespace
        while True:
            try:
                parent_path = resolve_parent_path(current)
            except InvalidFqsenError:
                self.logger.debug(
                    "Leaving namespace %s unparented: invalid parent path %r",
                    current.fqsen,
                    current.parent_path,
                )
                return False

            parent = _lookup_namespace(namespaces, parent_path)
            if parent is not None:
                parent.add_child(current.name, current)
                return True

            parent = NamespaceNode.from_path(parent_path)
            namespaces[parent_path] = parent
            elements[namespace_index_key(parent)] = parent
            parent.add_child(current.name, current)
            current = parent


def namespace_index_key(namespace: NamespaceNode) -> str:
    """Return the "elements" index key of a namespace node."""
    return NAMESPACE_INDEX_PREFIX + namespace.fqsen


def resolve_parent_path(namespace: NamespaceNode) -> str:
    """Return the key of the namespace ``namespace`` hangs off.

    Paths are accepted with or without the leading separator; a top-level
    segment such as ``App`` belongs to the root. The returned key keeps the
    node's own spelling, so ancestors of ``App\\Models`` are keyed ``App``.
    Raises InvalidFqsenError when the parent path cannot be parsed.
    """
    parent_path = namespace.parent_path
    if parent_path == "":
        if not namespace.name:
            raise InvalidFqsenError(f'"{namespace.fqsen}" has no parent namespace.')
        return ROOT
    rooted = parent_path if parent_path.startswith(SEPARATOR) else SEPARATOR + parent_path
    Fqsen(rooted)
    return parent_path


def _lookup_namespace(namespaces: Dict[str, Any], key: str) -> Optional[NamespaceNode]:
    entry = namespaces.get(key)
    if entry is None:
        return None
    return _expect_namespace(entry, key)


def _expect_namespace(entry: object, key: str) -> NamespaceNode:
    if not isinstance(entry, NamespaceNode):
        raise IndexTypeMismatchError("namespaces", key, NamespaceNode, entry)
    return entry


__all__ = ["NamespaceTreeBuilder", "namespace_index_key", "resolve_parent_path"]
