"""Index and tree construction passes for API documentation sets."""

from .config import DocCompilerConfig, LoggingConfig, load_config
from .errors import CompilerError, CompilerPassError, IndexTypeMismatchError, InvalidFqsenError
from .models import (
    ApiSet,
    DocumentationSet,
    Element,
    ElementKind,
    FileElement,
    IndexStore,
    NamespaceNode,
    PackageNode,
    Tag,
)
from .pipeline import Compiler

__all__ = [
    "ApiSet",
    "Compiler",
    "CompilerError",
    "CompilerPassError",
    "DocCompilerConfig",
    "DocumentationSet",
    "Element",
    "ElementKind",
    "FileElement",
    "IndexStore",
    "IndexTypeMismatchError",
    "InvalidFqsenError",
    "LoggingConfig",
    "NamespaceNode",
    "PackageNode",
    "Tag",
    "load_config",
]
