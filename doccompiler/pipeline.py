"""Compiler driver that runs passes over a documentation set."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .compiler import CompilerPass, check_unique, discover_passes
from .config import DocCompilerConfig
from .errors import CompilerPassError
from .logging import configure_logging, get_logger
from .models import DocumentationSet


class Compiler:
    """Runs compiler passes one at a time, highest priority first."""

    def __init__(self, passes: Optional[Iterable[CompilerPass]] = None) -> None:
        self._passes = check_unique(passes) if passes is not None else discover_passes()
        self.logger = get_logger("compiler")

    @classmethod
    def from_config(cls, config: DocCompilerConfig) -> "Compiler":
        """Build a compiler with the passes enabled in ``config``.

        Also applies the configured log level and log file.
        """
        configure_logging(config.logging.level, config.logging.file)
        return cls(discover_passes(config.passes.enabled or None))

    @property
    def passes(self) -> List[CompilerPass]:
        return sorted(self._passes, key=lambda compiler_pass: compiler_pass.priority, reverse=True)

    def compile(
        self,
        documentation_set: DocumentationSet,
        config: DocCompilerConfig | None = None,
    ) -> DocumentationSet:
        """Run every pass in order; a failing pass halts the pipeline."""
        if config is not None:
            documentation_set.settings.update(config.to_settings())

        for compiler_pass in self.passes:
            description = compiler_pass.description or type(compiler_pass).__name__
            self.logger.info("%s", description)
            try:
                result = compiler_pass(documentation_set)
            except Exception as exc:
                self.logger.error("Compiler pass failed: %s (%s)", description, exc)
                raise CompilerPassError(description, exc) from exc
            if result is not None:
                documentation_set = result

        return documentation_set


__all__ = ["Compiler"]
