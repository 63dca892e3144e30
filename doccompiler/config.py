"""Configuration loading for doccompiler (.doccompiler.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .logging import level_from_name

CONFIG_FILENAME = ".doccompiler.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class SettingsConfig:
    """Documentation-set settings handed to every compiler pass."""

    include_source: bool = False


@dataclass
class PassesConfig:
    """Compiler pass enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class LoggingConfig:
    """Log level and optional log file for a compiler run."""

    level: str = "info"
    file: Optional[Path] = None


@dataclass
class DocCompilerConfig:
    """Represents the high-level settings defined in .doccompiler.yml."""

    root: Path
    settings: SettingsConfig = field(default_factory=SettingsConfig)
    passes: PassesConfig = field(default_factory=PassesConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def to_settings(self) -> Dict[str, Any]:
        """Return the settings mapping stored on a documentation set."""
        return {"include-source": self.settings.include_source}


def load_config(config_path: Path) -> DocCompilerConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocCompilerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    settings = SettingsConfig()
    settings_data = _as_dict(data.get("settings"))
    if settings_data:
        include_source = _as_bool(settings_data.get("include_source"))
        if include_source is not None:
            settings.include_source = include_source

    passes = PassesConfig()
    compiler_data = _as_dict(data.get("compiler"))
    if compiler_data:
        passes.enabled = _as_str_list(compiler_data.get("passes"))

    log_config = LoggingConfig()
    logging_data = _as_dict(data.get("logging"))
    if logging_data:
        level = logging_data.get("level")
        if level is not None:
            log_config.level = _as_level(level)
        log_file = logging_data.get("file")
        if isinstance(log_file, str) and log_file.strip():
            log_config.file = (root / log_file.strip()).resolve()

    return DocCompilerConfig(root=root, settings=settings, passes=passes, logging=log_config)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_level(value: Any) -> str:
    name = str(value).strip().lower()
    try:
        level_from_name(name)
    except ValueError as exc:
        raise ConfigError(f"Invalid logging.level in {CONFIG_FILENAME}: {exc}") from exc
    return name


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DocCompilerConfig",
    "LoggingConfig",
    "PassesConfig",
    "SettingsConfig",
    "load_config",
]
