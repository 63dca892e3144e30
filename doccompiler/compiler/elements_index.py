"""Pass that builds the flat "elements" index and the per-kind indexes.

Namespace keys in the "elements" index are prefixed with a tilde (~) by the
namespace tree pass, so they cannot collide with the FQSEN of a class,
interface, trait or function spelled the same way.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from ..logging import get_logger
from ..models import ApiSet, DocumentationSet, Element, ElementKind
from .base import CompilerPass

_KIND_INDEXES: Dict[ElementKind, str] = {
    ElementKind.CONSTANT: "constants",
    ElementKind.FUNCTION: "functions",
    ElementKind.CLASS: "classes",
    ElementKind.INTERFACE: "interfaces",
    ElementKind.TRAIT: "traits",
    ElementKind.ENUM: "enums",
}

_SUB_ELEMENT_KINDS: Dict[ElementKind, Tuple[ElementKind, ...]] = {
    ElementKind.CLASS: (ElementKind.METHOD, ElementKind.CONSTANT, ElementKind.PROPERTY),
    ElementKind.INTERFACE: (ElementKind.METHOD, ElementKind.CONSTANT),
    ElementKind.TRAIT: (ElementKind.METHOD, ElementKind.PROPERTY),
    ElementKind.ENUM: (ElementKind.METHOD, ElementKind.CASE),
}


class ElementsIndexBuilder(CompilerPass):
    """Constructs the "elements" index and populates it with all structural elements."""

    name = "elements-index"
    priority = 15000
    description = 'Build "elements" index'

    def __init__(self) -> None:
        self.logger = get_logger("compiler.elements_index")

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        elements: Dict[str, object] = {}
        documentation_set.indexes.set("elements", elements)

        if not isinstance(documentation_set, ApiSet):
            return documentation_set

        kind_indexes = {
            kind: documentation_set.indexes.set(name, {})
            for kind, name in _KIND_INDEXES.items()
        }

        for file in documentation_set.files.values():
            for kind, index in kind_indexes.items():
                for element in file.members_of(kind):
                    self.add_elements_to_indexes([element], [index, elements])
                    self.add_elements_to_indexes(self.get_sub_elements(element), [elements])

        self.logger.debug(
            "Indexed %d elements from %d files", len(elements), len(documentation_set.files)
        )
        return documentation_set

    @staticmethod
    def get_sub_elements(element: Element) -> List[Element]:
        """Return the methods, properties, constants or cases owned by ``element``.

        Only classes, interfaces, traits and enums own sub-elements; any other
        kind yields an empty list.
        """
        sub_elements: List[Element] = []
        for kind in _SUB_ELEMENT_KINDS.get(element.kind, ()):
            sub_elements.extend(element.members_of(kind))
        return sub_elements

    @staticmethod
    def add_elements_to_indexes(
        elements: Iterable[Element], indexes: Sequence[Dict[str, object]]
    ) -> None:
        for element in elements:
            key = index_key(element)
            for index in indexes:
                index[key] = element


def index_key(element: Element) -> str:
    """Return the index key for a structural element."""
    return str(element.fqsen)


__all__ = ["ElementsIndexBuilder", "index_key"]
