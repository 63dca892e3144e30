"""Pass that drops embedded source code from file descriptors."""

from __future__ import annotations

from ..logging import get_logger
from ..models import ApiSet, DocumentationSet
from .base import CompilerPass

INCLUDE_SOURCE_SETTING = "include-source"


class RemoveSourcecode(CompilerPass):
    """Clears the raw source payload of every file unless it should be included."""

    name = "remove-source"
    priority = 2000
    description = "Removing sourcecode from file descriptors"

    def __init__(self) -> None:
        self.logger = get_logger("compiler.remove_source")

    def __call__(self, documentation_set: DocumentationSet) -> DocumentationSet:
        if not isinstance(documentation_set, ApiSet):
            return documentation_set
        if documentation_set.settings.get(INCLUDE_SOURCE_SETTING):
            return documentation_set

        for file in documentation_set.files.values():
            file.source = None

        self.logger.debug("Removed source from %d files", len(documentation_set.files))
        return documentation_set


__all__ = ["INCLUDE_SOURCE_SETTING", "RemoveSourcecode"]
