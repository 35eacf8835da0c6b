"""Module base class and the container that loads modules and maps actions."""

from __future__ import annotations

import importlib
import inspect
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Union

from .config import ActorSettings
from .errors import ConfigurationError
from .logging import get_logger

logger = get_logger("modules")


class Module:
    """Base class for capability providers whose public methods become actions."""

    include_inherited_actions: ClassVar[bool] = True
    only_actions: ClassVar[Sequence[str]] = ()
    exclude_actions: ClassVar[Sequence[str]] = ()
    config_defaults: ClassVar[Mapping[str, Any]] = {}
    required_fields: ClassVar[Sequence[str]] = ()

    def __init__(
        self,
        container: Optional["ModuleContainer"] = None,
        config: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.container = container
        self.config: Dict[str, Any] = {**self.config_defaults, **(config or {})}
        missing = [name for name in self.required_fields if name not in self.config]
        if missing:
            raise ConfigurationError(
                f"Module {type(self).__qualname__} is missing required config: {', '.join(missing)}"
            )


def action_names(cls: type) -> List[str]:
    """Return the action names a module class exposes, in declaration order."""
    include_inherited = getattr(cls, "include_inherited_actions", True)
    only = set(getattr(cls, "only_actions", ()) or ())
    exclude = set(getattr(cls, "exclude_actions", ()) or ())
    classes = cls.__mro__ if include_inherited else (cls,)

    names: List[str] = []
    for klass in classes:
        if klass in (Module, object):
            continue
        for name, value in vars(klass).items():
            if name.startswith("_") or name in names or hasattr(Module, name):
                continue
            if not _is_function(value):
                continue
            if only and name not in only:
                continue
            if name in exclude:
                continue
            names.append(name)
    return names


class ModuleContainer:
    """Instantiates modules and records which module provides each action.

    The first module to claim an action keeps it.
    """

    def __init__(self) -> None:
        self._modules: Dict[str, object] = {}
        self._actions: Dict[str, str] = {}

    @classmethod
    def from_settings(cls, settings: ActorSettings) -> "ModuleContainer":
        container = cls()
        for name, config in settings.enabled_modules():
            container.create(name, config)
        return container

    def create(self, module: Union[str, type], config: Optional[Mapping[str, Any]] = None) -> object:
        """Instantiate ``module`` (a dotted path or a class) and register its actions."""
        module_cls = _import_module_class(module) if isinstance(module, str) else module
        if not isinstance(module_cls, type):
            raise ConfigurationError(f"Module {module!r} is not a class")
        name = module if isinstance(module, str) else f"{module_cls.__module__}.{module_cls.__qualname__}"
        if name in self._modules:
            raise ConfigurationError(f"Module {name} is already enabled")

        if issubclass(module_cls, Module):
            instance: object = module_cls(self, config)
        elif config:
            raise ConfigurationError(f"Module {name} does not accept configuration")
        else:
            instance = module_cls()
        self._modules[name] = instance

        for action in action_names(module_cls):
            owner = self._actions.setdefault(action, name)
            if owner != name:
                logger.debug("Action %s already provided by %s; ignoring %s", action, owner, name)
        logger.debug("Enabled module %s", name)
        return instance

    def all(self) -> Dict[str, object]:
        return dict(self._modules)

    def actions(self) -> Dict[str, str]:
        return dict(self._actions)

    def get(self, name: str) -> object:
        try:
            return self._modules[name]
        except KeyError as exc:
            raise ConfigurationError(f"Module {name} is not enabled") from exc

    def module_for_action(self, action: str) -> object:
        try:
            return self._modules[self._actions[action]]
        except KeyError as exc:
            raise LookupError(f"No enabled module provides action '{action}'") from exc


def _import_module_class(path: str) -> Any:
    module_name, _, attribute = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Module '{path}' must be a dotted import path")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Module '{path}' could not be imported: {exc}") from exc
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigurationError(f"Module '{path}' was not found in {module_name}") from exc


def _is_function(value: Any) -> bool:
    if isinstance(value, (staticmethod, classmethod)):
        value = value.__func__
    return inspect.isfunction(value)


__all__ = ["Module", "ModuleContainer", "action_names"]
