"""Configuration loading for actor definitions (actor.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ConfigurationError

CONFIG_FILENAME = "actor.yml"


class ConfigError(ConfigurationError):
    """Raised when the actor configuration file cannot be parsed."""


@dataclass
class ActorSettings:
    """Represents the settings of one actor as defined in actor.yml."""

    actor: str
    root: Path = field(default_factory=Path.cwd)
    output: Optional[Path] = None
    modules: Dict[str, Any] = field(default_factory=dict)
    step_decorators: List[str] = field(default_factory=list)
    templates_dir: Optional[Path] = None

    def output_path(self) -> Path:
        """Return where the generated actions module is written."""
        if self.output is None:
            return self.root / f"{snake_case(self.actor)}_actions.py"
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    def enabled_modules(self) -> List[Tuple[str, Dict[str, Any]]]:
        """Return ``(module name, merged config)`` in declaration order."""
        shared = _as_dict(self.modules.get("config"))
        enabled: List[Tuple[str, Dict[str, Any]]] = []
        for entry in _as_list(self.modules.get("enabled")):
            if isinstance(entry, str):
                name, inline = entry, {}
            elif isinstance(entry, dict) and len(entry) == 1:
                name, inline = next(iter(entry.items()))
                inline = _as_dict(inline)
            else:
                raise ConfigError(f"Invalid module entry {entry!r}: expected a name or a single-key mapping")
            merged = {**_as_dict(shared.get(name)), **inline}
            enabled.append((str(name), merged))
        return enabled


def load_config(config_path: Path) -> ActorSettings:
    """Load actor settings from disk."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        raise ConfigError(f"Actor configuration not found at {config_file}")
    root = config_file.parent

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    actor = _as_str(data.get("actor"))
    if not actor or not actor.isidentifier():
        raise ConfigError(f"{config_file.name} must define 'actor' as a valid class name")

    output_str = _as_str(data.get("output"))
    templates_dir_str = _as_str(data.get("templates_dir"))

    modules = data.get("modules")
    if modules is None:
        modules = {}
    if not isinstance(modules, dict):
        raise ConfigError("'modules' must be a mapping with 'enabled' and optional 'config'")

    return ActorSettings(
        actor=actor,
        root=root,
        output=Path(output_str) if output_str else None,
        modules=modules,
        step_decorators=_as_str_list(data.get("step_decorators")),
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (str, dict)):
        return [value]
    if isinstance(value, Sequence):
        return list(value)
    return []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, str)]
    return []


__all__ = ["ActorSettings", "CONFIG_FILENAME", "ConfigError", "load_config", "snake_case"]
