"""Exception types raised while compiling a documentation set."""

from __future__ import annotations


class CompilerError(RuntimeError):
    """Base class for failures that halt the compiler pipeline."""


class CompilerPassError(CompilerError):
    """Raised by the compiler when a single pass aborts."""

    def __init__(self, description: str, cause: BaseException) -> None:
        super().__init__(f"Compiler pass '{description}' failed: {cause}")
        self.description = description
        self.cause = cause


class IndexTypeMismatchError(TypeError):
    """An index lookup returned an entry of an unexpected node kind."""

    def __init__(self, index: str, key: str, expected: type, actual: object) -> None:
        actual_name = type(actual).__name__
        super().__init__(
            f"Index '{index}' entry '{key}' is a {actual_name}, expected {expected.__name__}"
        )
        self.index = index
        self.key = key
        self.expected = expected
        self.actual = actual


class InvalidFqsenError(ValueError):
    """Raised when text cannot be parsed as a fully qualified element name."""


__all__ = [
    "CompilerError",
    "CompilerPassError",
    "IndexTypeMismatchError",
    "InvalidFqsenError",
]
