"""Reflection adapter exposing Python classes through the introspection contracts."""

from __future__ import annotations

import abc
import dataclasses
import inspect
import types
import typing
from typing import Any, Dict, List, Optional, Sequence, Set

from ..errors import TypeRenderError
from ..types import (
    PARENT,
    SELF,
    TOP_TYPE,
    BuiltinType,
    GenericType,
    IntersectionAlias,
    IntersectionType,
    LiteralType,
    NamedType,
    Parent,
    TypeDescriptor,
    TypeList,
    UnionType,
)
from .base import ParameterKind
from .literals import render_literal

_NONE_TYPE = type(None)
_ROOT_TYPES = (object, abc.ABC, typing.Generic, typing.Protocol)
_TYPING_FORMS: Dict[Any, str] = {
    typing.NoReturn: "typing.NoReturn",
    typing.Never: "typing.Never",
    typing.LiteralString: "typing.LiteralString",
}
_KINDS = {
    inspect.Parameter.POSITIONAL_ONLY: ParameterKind.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ParameterKind.POSITIONAL,
    inspect.Parameter.VAR_POSITIONAL: ParameterKind.VAR_POSITIONAL,
    inspect.Parameter.KEYWORD_ONLY: ParameterKind.KEYWORD_ONLY,
    inspect.Parameter.VAR_KEYWORD: ParameterKind.VAR_KEYWORD,
}
_MISSING = object()


def reflect_type(cls: type) -> "PythonType":
    """Return the type handle for ``cls``."""
    return PythonType(cls)


def qualified_name(cls: type) -> str:
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def is_interface(cls: type) -> bool:
    """Return True when ``cls`` is a protocol or an ABC declaring only abstract methods."""
    if cls in _ROOT_TYPES:
        return False
    if getattr(cls, "_is_protocol", False):
        return True
    if not isinstance(cls, abc.ABCMeta):
        return False
    abstract = getattr(cls, "__abstractmethods__", frozenset())
    declared = [
        name
        for name, value in vars(cls).items()
        if not name.startswith("__") and _unwrap(value)[0] is not None
    ]
    return bool(declared) and all(name in abstract for name in declared)


class PythonType:
    """Type handle backed by a Python class."""

    def __init__(self, cls: type) -> None:
        self.cls = cls

    @property
    def name(self) -> str:
        return qualified_name(self.cls)

    @property
    def module(self) -> str:
        return self.cls.__module__

    def parent(self) -> Optional["PythonType"]:
        for base in self.cls.__bases__:
            if base in _ROOT_TYPES or is_interface(base):
                continue
            return PythonType(base)
        return None

    def interfaces(self) -> List["PythonType"]:
        return [PythonType(base) for base in self.cls.__bases__ if is_interface(base)]

    def find_method(self, name: str) -> Optional["PythonMethod"]:
        for klass in self.cls.__mro__:
            if name not in klass.__dict__:
                continue
            function, bound = _unwrap(klass.__dict__[name])
            if function is None:
                return None
            return PythonMethod(name, function, PythonType(klass), skip_receiver=bound)
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PythonType) and other.cls is self.cls

    def __hash__(self) -> int:
        return hash(self.cls)

    def __repr__(self) -> str:
        return f"PythonType({self.name})"


class PythonMethod:
    """Method handle backed by a function found on a class."""

    def __init__(
        self,
        name: str,
        function: types.FunctionType,
        declaring: PythonType,
        *,
        skip_receiver: bool,
    ) -> None:
        self.name = name
        self._function = function
        self._declaring = declaring
        self._skip_receiver = skip_receiver
        self._hints: Optional[Dict[str, Any]] = None

    def declaring_type(self) -> PythonType:
        return self._declaring

    def doc(self) -> Optional[str]:
        return self._function.__doc__

    def parameters(self) -> List["PythonParameter"]:
        params = list(inspect.signature(self._function).parameters.values())
        if self._skip_receiver and params and params[0].kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            params = params[1:]
        hints = self._type_hints()
        return [
            PythonParameter(param, hints.get(param.name, _MISSING), self._function)
            for param in params
        ]

    def return_type(self) -> Optional[TypeDescriptor]:
        hints = self._type_hints()
        if "return" not in hints:
            return None
        return describe(hints["return"])

    def _type_hints(self) -> Dict[str, Any]:
        # Unresolvable forward references propagate: the module itself is broken.
        if self._hints is None:
            self._hints = typing.get_type_hints(self._function)
        return self._hints


class PythonParameter:
    """Parameter handle backed by :class:`inspect.Parameter`."""

    def __init__(self, param: inspect.Parameter, hint: Any, function: types.FunctionType) -> None:
        self.name = param.name
        self.kind = _KINDS[param.kind]
        self._param = param
        self._hint = hint
        self._function = inspect.unwrap(function)

    def annotation(self) -> Optional[TypeDescriptor]:
        if self._hint is _MISSING:
            return None
        return describe(self._hint)

    def is_optional(self) -> bool:
        return self._param.default is not inspect.Parameter.empty

    def default_literal(self, imports: Set[str]) -> str:
        return render_literal(
            self._param.default,
            imports,
            module_name=self._function.__module__,
            namespace=self._function.__globals__,
        )


def describe(annotation: Any) -> TypeDescriptor:
    """Convert an evaluated annotation into a type descriptor."""
    if annotation is None or annotation is _NONE_TYPE:
        return BuiltinType("None")
    if annotation is Any:
        return NamedType(TOP_TYPE)
    if annotation is typing.Self:
        return NamedType(SELF)
    if annotation is Parent:
        return NamedType(PARENT)
    if annotation is Ellipsis:
        return BuiltinType("...")
    if isinstance(annotation, list):
        return TypeList(tuple(describe(member) for member in annotation))
    if isinstance(annotation, IntersectionAlias):
        return IntersectionType(tuple(describe(member) for member in annotation.members))
    if annotation in _TYPING_FORMS:
        return NamedType(_TYPING_FORMS[annotation])
    if isinstance(annotation, typing.TypeVar):
        return NamedType(
            f"{annotation.__module__}.{annotation.__name__}", module=annotation.__module__
        )

    origin = typing.get_origin(annotation)
    arguments = typing.get_args(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return _describe_union(arguments)
    if origin is typing.Literal:
        return LiteralType(tuple(render_literal(value, set()) for value in arguments))
    if origin is not None:
        # Bare ``typing.List`` has no __args__; ``tuple[()]`` has an empty one.
        if getattr(annotation, "__args__", None) is None:
            return describe(origin)
        return GenericType(describe(origin), tuple(describe(argument) for argument in arguments))

    if isinstance(annotation, type):
        if annotation.__module__ == "builtins":
            return BuiltinType(annotation.__qualname__)
        return NamedType(qualified_name(annotation), module=annotation.__module__)
    raise TypeRenderError(f"Unsupported annotation {annotation!r}")


def _describe_union(arguments: Sequence[Any]) -> TypeDescriptor:
    members = [argument for argument in arguments if argument is not _NONE_TYPE]
    if len(members) == 1 and len(arguments) == 2:
        described = describe(members[0])
        if hasattr(described, "nullable"):
            return dataclasses.replace(described, nullable=True)
    return UnionType(tuple(describe(argument) for argument in arguments))


def _unwrap(attribute: Any) -> tuple[Optional[types.FunctionType], bool]:
    if isinstance(attribute, staticmethod):
        function = attribute.__func__
        return (function, False) if inspect.isfunction(function) else (None, False)
    if isinstance(attribute, classmethod):
        function = attribute.__func__
        return (function, True) if inspect.isfunction(function) else (None, False)
    if inspect.isfunction(attribute):
        return attribute, True
    return None, False


__all__ = [
    "PythonMethod",
    "PythonParameter",
    "PythonType",
    "describe",
    "is_interface",
    "qualified_name",
    "reflect_type",
]
