"""Generate the actions mixin that delegates actor methods to modules."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Iterable, List, Mapping, Optional, Set, Tuple, Union

from . import __version__
from .classify import classify
from .config import ActorSettings
from .decorators import DecoratorSpec, StepDecoratorRegistry
from .docs import format_doc, resolve_doc
from .errors import ConfigurationError
from .fingerprint import fingerprint
from .introspection.base import MethodSignature, ParameterKind, TypeHandle, introspect
from .introspection.python import reflect_type
from .logging import get_logger
from .stringify import TypeStringifier, is_void
from .template import Template

ActionMap = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_STAMP_PATTERN = re.compile(r"^# \[STAMP\] (?P<hash>[0-9a-f]+)\s*$", re.MULTILINE)
_PRELUDE_IMPORTS = {"abc", "builtins", "typing"}
_DOC_INDENT = " " * 8


@dataclass(frozen=True)
class GenerationResult:
    """Source text of one generation pass plus what went into it."""

    source: str
    num_methods: int
    fingerprint: str


class ActionsGenerator:
    """Builds the ``<Actor>Actions`` mixin for a set of loaded modules.

    Every action becomes a wrapper that records a step on the scenario and
    lets it dispatch to the module. Step decorators may add more wrappers
    per action. Any failure aborts the whole pass; no partial source is
    returned.
    """

    CLASS_TEMPLATE = "actions.py.j2"
    METHOD_TEMPLATE = "method.py.j2"

    def __init__(
        self,
        settings: ActorSettings,
        modules: Mapping[str, object],
        actions: ActionMap,
        decorators: Optional[Iterable[DecoratorSpec]] = None,
        *,
        reflector: Callable[[type], TypeHandle] = reflect_type,
        version: str = __version__,
    ) -> None:
        if not settings.actor:
            raise ConfigurationError("Actor settings must name the actor class")
        self.settings = settings
        self._modules = modules
        self._actions: List[Tuple[str, str]] = list(
            actions.items() if isinstance(actions, Mapping) else actions
        )
        self._decorator_specs = list(decorators) if decorators is not None else list(settings.step_decorators)
        self._decorators = StepDecoratorRegistry(self._decorator_specs)
        self._reflector = reflector
        self._version = version
        self._stringifier = TypeStringifier()
        self._class_template = Template.load(self.CLASS_TEMPLATE, settings.templates_dir)
        self._method_template = Template.load(self.METHOD_TEMPLATE, settings.templates_dir)
        self._num_methods = 0
        self.logger = get_logger("generator")

    @property
    def num_methods(self) -> int:
        """Number of distinct actions emitted by the last pass."""
        return self._num_methods

    def fingerprint(self) -> str:
        return fingerprint(
            self._modules,
            self.settings.modules,
            self._decorator_specs,
            version=self._version,
        )

    def generate(self) -> GenerationResult:
        emitted: Set[str] = set()
        imports: Set[str] = set()
        code: List[str] = []
        for action, module_name in self._actions:
            if action in emitted:
                self.logger.debug("Skipping %s from %s: action already generated", action, module_name)
                continue
            code.append(self._render_action(action, module_name, imports))
            emitted.add(action)
            self.logger.debug("Generated %s from %s", action, module_name)

        stamp = self.fingerprint()
        source = (
            self._class_template.place("hash", stamp)
            .place("name", self.settings.actor)
            .place("imports", "".join(f"import {name}\n" for name in sorted(imports - _PRELUDE_IMPORTS)))
            .place("methods", "".join(code).rstrip("\n"))
            .produce()
        )
        self._num_methods = len(emitted)
        self.logger.info("Generated %d actions for %s", self._num_methods, self.settings.actor)
        return GenerationResult(source=source, num_methods=self._num_methods, fingerprint=stamp)

    def produce(self) -> str:
        return self.generate().source

    def _render_action(self, action: str, module_name: str, imports: Set[str]) -> str:
        module = self._modules.get(module_name)
        if module is None:
            raise ConfigurationError(
                f"Action '{action}' refers to module {module_name}, which is not loaded"
            )
        method = self._reflector(type(module)).find_method(action)
        if method is None:
            raise ConfigurationError(f"Module {module_name} has no method '{action}'")

        signature = introspect(method)
        owner = signature.declaring_type
        arguments, keywords = _forwarding(signature)
        doc = resolve_doc(signature.name, signature.doc, owner)

        template = (
            self._method_template.place("module", owner.name)
            .place("method", signature.name)
            .place("return_type", self._stringifier.return_hint(signature.return_type, owner))
            .place("return", "" if is_void(signature.return_type) else "return ")
            .place("params", self._stringifier.parameters(signature))
            .place("arguments", arguments)
            .place("keywords", keywords)
            .place("doc", format_doc(doc, _DOC_INDENT))
            .place("action", action)
            .place("step", classify(action).value)
        )
        blocks = [template.produce()]
        blocks.extend(self._decorators.apply(template))
        imports.update(signature.imports)
        return "".join(blocks)


def _forwarding(signature: MethodSignature) -> Tuple[str, str]:
    positional: List[str] = []
    keywords: List[str] = []
    for param in signature.parameters:
        if param.kind in (ParameterKind.POSITIONAL_ONLY, ParameterKind.POSITIONAL):
            positional.append(param.name)
        elif param.kind is ParameterKind.VAR_POSITIONAL:
            positional.append(f"*{param.name}")
        elif param.kind is ParameterKind.KEYWORD_ONLY:
            keywords.append(f'"{param.name}": {param.name}')
        else:
            keywords.append(f"**{param.name}")
    return "[" + ", ".join(positional) + "]", "{" + ", ".join(keywords) + "}"


def read_stamp(source: str) -> Optional[str]:
    """Return the fingerprint embedded in previously generated source."""
    match = _STAMP_PATTERN.search(source)
    return match.group("hash") if match else None


__all__ = ["ActionMap", "ActionsGenerator", "GenerationResult", "read_stamp"]
