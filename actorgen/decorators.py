"""Step decorators contributing extra generated methods per action."""

from __future__ import annotations

import importlib
from typing import Iterable, List, Optional, Protocol, Union

from .classify import StepKind, classify
from .errors import ConfigurationError
from .logging import get_logger
from .template import Template

logger = get_logger("decorators")


class StepDecorator(Protocol):
    """Plugin producing zero or one extra method from a bound method template."""

    def get_template(self, template: Template) -> Optional[Template]:
        """Return a template for the extra method, or None to skip the action."""


DecoratorSpec = Union[str, object]


class StepDecoratorRegistry:
    """Ordered, identity de-duplicated set of step decorators."""

    CAPABILITY = "get_template"

    def __init__(self, decorators: Iterable[DecoratorSpec] | None = None) -> None:
        self._decorators: List[object] = []
        for spec in decorators or ():
            decorator = resolve_decorator(spec) if isinstance(spec, str) else spec
            if any(existing is decorator for existing in self._decorators):
                logger.debug("Skipping duplicate step decorator %s", identify(decorator))
                continue
            if not callable(getattr(decorator, self.CAPABILITY, None)):
                raise ConfigurationError(
                    "Wrong configuration for step decorators: "
                    f"{identify(decorator)} does not implement "
                    f"{self.CAPABILITY}(template) from actorgen.decorators.StepDecorator"
                )
            self._decorators.append(decorator)

    def __len__(self) -> int:
        return len(self._decorators)

    def __iter__(self):
        return iter(self._decorators)

    def identifiers(self) -> List[str]:
        return [identify(decorator) for decorator in self._decorators]

    def apply(self, template: Template) -> List[str]:
        """Render every decorator contribution for one action, in registry order."""
        blocks: List[str] = []
        for decorator in self._decorators:
            produced = getattr(decorator, self.CAPABILITY)(template)
            if produced is not None:
                blocks.append(produced.produce())
        return blocks


def resolve_decorator(path: str) -> object:
    """Import ``package.module.Name`` and return the named object."""
    module_name, _, attribute = path.rpartition(".")
    if not module_name:
        raise ConfigurationError(f"Step decorator '{path}' must be a dotted import path")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigurationError(f"Step decorator '{path}' could not be imported: {exc}") from exc
    try:
        return getattr(module, attribute)
    except AttributeError as exc:
        raise ConfigurationError(f"Step decorator '{path}' was not found in {module_name}") from exc


def identify(decorator: object) -> str:
    if isinstance(decorator, str):
        return decorator
    target = decorator if isinstance(decorator, type) else type(decorator)
    return f"{target.__module__}.{target.__qualname__}"


def prefixed(prefix: str, action: str) -> str:
    """Prefix an action name following its casing: ``try_to_see_x`` or ``tryToSeeX``."""
    if action.islower() or "_" in action:
        return f"{prefix}_{action}"
    head, *rest = prefix.split("_")
    return head + "".join(part.capitalize() for part in rest) + action[:1].upper() + action[1:]


def _strip_dont(action: str) -> Optional[str]:
    for marker in ("dont_", "dont"):
        if action.startswith(marker + "see") or action.startswith(marker + "See"):
            return action[len(marker):]
    return None


def _prepend_doc(template: Template, note: str) -> Template:
    return template.place("doc", f"{note}\n\n        {template.get_var('doc', '')}")


class ConditionalAssertion:
    """Adds ``can_see_*`` / ``cant_see_*`` twins of assertions that do not stop the test."""

    @staticmethod
    def get_template(template: Template) -> Optional[Template]:
        action = template.get_var("action")
        negated = _strip_dont(action)
        if negated is not None:
            name = prefixed("cant", _lower_first(negated))
        elif classify(action) is StepKind.ASSERTION:
            name = prefixed("can", action)
        else:
            return None
        template = _prepend_doc(template, "[!] Conditional Assertion: Test won't be stopped on fail")
        return template.place("action", name).place("step", "ConditionalAssertion")


class TryTo:
    """Adds ``try_to_*`` methods that report success as a bool instead of failing."""

    @staticmethod
    def get_template(template: Template) -> Optional[Template]:
        action = template.get_var("action")
        if classify(action) is StepKind.ASSERTION or _strip_dont(action) is not None:
            return None
        template = _prepend_doc(template, "[!] Test won't be stopped on fail. Error won't be logged")
        return (
            template.place("action", prefixed("try_to", action))
            .place("step", "TryTo")
            .place("return_type", " -> bool")
            .place("return", "return ")
        )


class Retry:
    """Adds ``retry_*`` methods that re-run the action until it passes."""

    @staticmethod
    def get_template(template: Template) -> Optional[Template]:
        action = template.get_var("action")
        if classify(action) is StepKind.ASSERTION or _strip_dont(action) is not None:
            return None
        template = _prepend_doc(template, "[!] Retries the step until it passes")
        return template.place("action", prefixed("retry", action)).place("step", "Retry")


def _lower_first(action: str) -> str:
    return action[:1].lower() + action[1:]


__all__ = [
    "ConditionalAssertion",
    "DecoratorSpec",
    "Retry",
    "StepDecorator",
    "StepDecoratorRegistry",
    "TryTo",
    "identify",
    "prefixed",
    "resolve_decorator",
]
