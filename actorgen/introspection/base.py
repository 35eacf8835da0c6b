"""Introspection contracts shared by reflection adapters and the generator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Protocol, Sequence, Set, Tuple

from ..types import PARENT, SELF, TypeDescriptor, named_types


class ParameterKind(Enum):
    """How a parameter binds arguments."""

    POSITIONAL_ONLY = "positional_only"
    POSITIONAL = "positional"
    VAR_POSITIONAL = "var_positional"
    KEYWORD_ONLY = "keyword_only"
    VAR_KEYWORD = "var_keyword"


class TypeHandle(Protocol):
    """A reflected class able to answer structural questions."""

    @property
    def name(self) -> str:
        """Fully qualified type name."""

    @property
    def module(self) -> str:
        """Module that has to be imported for ``name`` to resolve."""

    def parent(self) -> Optional["TypeHandle"]:
        """Return the immediate parent type, or None for a root type."""

    def interfaces(self) -> Sequence["TypeHandle"]:
        """Return the capability interfaces the type implements directly."""

    def find_method(self, name: str) -> Optional["MethodHandle"]:
        """Return the method visible on this type under ``name``."""


class ParameterHandle(Protocol):
    """A reflected method parameter."""

    name: str
    kind: ParameterKind

    def annotation(self) -> Optional[TypeDescriptor]:
        """Return the declared type, or None when undeclared."""

    def is_optional(self) -> bool:
        """Return True when the parameter declares a default value."""

    def default_literal(self, imports: Set[str]) -> str:
        """Render the default value as source, recording modules it needs."""


class MethodHandle(Protocol):
    """A reflected method as exposed by a module."""

    name: str

    def declaring_type(self) -> TypeHandle:
        """Return the type that declares the method body."""

    def doc(self) -> Optional[str]:
        """Return the raw documentation attached to this declaration."""

    def parameters(self) -> Sequence[ParameterHandle]:
        """Return the parameters excluding the bound receiver."""

    def return_type(self) -> Optional[TypeDescriptor]:
        """Return the declared return type, or None when undeclared."""


@dataclass(frozen=True)
class ParameterSignature:
    """Structural view of a single parameter."""

    name: str
    kind: ParameterKind
    annotation: Optional[TypeDescriptor]
    optional: bool
    default: Optional[str]


@dataclass(frozen=True)
class MethodSignature:
    """Structural view of a module method, created and discarded per action."""

    name: str
    parameters: Tuple[ParameterSignature, ...]
    return_type: Optional[TypeDescriptor]
    declaring_type: TypeHandle
    doc: Optional[str]
    imports: FrozenSet[str] = field(default_factory=frozenset)


def introspect(method: MethodHandle) -> MethodSignature:
    """Extract the signature of ``method`` without rendering any types."""
    imports: Set[str] = set()
    parameters = []
    for param in method.parameters():
        optional = param.is_optional()
        default = param.default_literal(imports) if optional else None
        parameters.append(
            ParameterSignature(
                name=param.name,
                kind=param.kind,
                annotation=param.annotation(),
                optional=optional,
                default=default,
            )
        )
    return_type = method.return_type()
    declaring = method.declaring_type()
    annotations = [param.annotation for param in parameters] + [return_type]
    imports.update(_annotation_imports(annotations, declaring))
    return MethodSignature(
        name=method.name,
        parameters=tuple(parameters),
        return_type=return_type,
        declaring_type=declaring,
        doc=method.doc(),
        imports=frozenset(imports),
    )


def _annotation_imports(
    annotations: Sequence[Optional[TypeDescriptor]], declaring: TypeHandle
) -> Set[str]:
    modules: Set[str] = set()
    for annotation in annotations:
        for named in named_types(annotation):
            if named.name == SELF:
                modules.add(declaring.module)
            elif named.name == PARENT:
                parent = declaring.parent()
                if parent is not None:
                    modules.add(parent.module)
            elif named.module is not None:
                modules.add(named.module)
    return modules


__all__ = [
    "MethodHandle",
    "MethodSignature",
    "ParameterHandle",
    "ParameterKind",
    "ParameterSignature",
    "TypeHandle",
    "introspect",
]
