"""Base classes for compiler pass plugins."""

from abc import ABC, abstractmethod

from ..models import DocumentationSet


class CompilerPass(ABC):
    """Contract for passes that mutate a documentation set in place.

    Passes run sequentially, highest ``priority`` first. ``name`` is the key
    used to enable a pass from configuration.
    """

    name: str = ""
    priority: int = 0
    description: str = ""

    @abstractmethod
    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        """Process the documentation set and return it."""
