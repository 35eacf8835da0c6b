"""Type descriptors produced by introspection and consumed by the stringifier.

Descriptors are plain values: they carry names, never live type objects, so
the rest of the generator stays independent of the reflection substrate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

SELF = "self"
PARENT = "parent"
TOP_TYPE = "typing.Any"


@dataclass(frozen=True)
class BuiltinType:
    """A type from the ``builtins`` namespace, rendered by its bare name."""

    name: str
    nullable: bool = False


@dataclass(frozen=True)
class NamedType:
    """A fully qualified, non-builtin type such as ``pkg.mod.Page``.

    ``module`` names the module to import for the type to resolve; it is
    None for ``self``, ``parent`` and names the generated prelude provides.
    """

    name: str
    nullable: bool = False
    module: Optional[str] = field(default=None, compare=False)


@dataclass(frozen=True)
class UnionType:
    """Union of member types in declaration order."""

    members: Tuple["TypeDescriptor", ...]


@dataclass(frozen=True)
class IntersectionType:
    """Intersection of member types in declaration order."""

    members: Tuple["TypeDescriptor", ...]


@dataclass(frozen=True)
class GenericType:
    """A parameterised generic, e.g. ``list[str]``."""

    origin: "TypeDescriptor"
    arguments: Tuple["TypeDescriptor", ...]
    nullable: bool = False


@dataclass(frozen=True)
class TypeList:
    """Bracketed argument list used by ``Callable[[...], R]``."""

    members: Tuple["TypeDescriptor", ...]


@dataclass(frozen=True)
class LiteralType:
    """``typing.Literal`` with its values already rendered as source text."""

    values: Tuple[str, ...]
    nullable: bool = False


TypeDescriptor = Union[
    BuiltinType, NamedType, UnionType, IntersectionType, GenericType, TypeList, LiteralType
]


def named_types(desc: Optional[TypeDescriptor]) -> Iterator[NamedType]:
    """Yield every named type referenced by ``desc``, depth first."""
    if desc is None:
        return
    if isinstance(desc, NamedType):
        yield desc
    elif isinstance(desc, (UnionType, IntersectionType, TypeList)):
        for member in desc.members:
            yield from named_types(member)
    elif isinstance(desc, GenericType):
        yield from named_types(desc.origin)
        for argument in desc.arguments:
            yield from named_types(argument)


class Parent:
    """Annotation marker standing for the declaring class's parent class.

    ``def clone(self) -> Parent`` renders as the qualified name of the
    immediate parent of the class that declares ``clone``.
    """


@dataclass(frozen=True)
class IntersectionAlias:
    members: Tuple[object, ...]


class _IntersectionForm:
    """``Intersection[A, B]`` annotates a value satisfying every member type."""

    def __getitem__(self, params: object) -> IntersectionAlias:
        if not isinstance(params, tuple):
            params = (params,)
        if len(params) < 2:
            raise TypeError("Intersection[...] requires at least two types")
        return IntersectionAlias(tuple(params))

    def __repr__(self) -> str:
        return "actorgen.types.Intersection"


Intersection = _IntersectionForm()


__all__ = [
    "BuiltinType",
    "GenericType",
    "Intersection",
    "IntersectionAlias",
    "IntersectionType",
    "LiteralType",
    "NamedType",
    "PARENT",
    "Parent",
    "SELF",
    "TOP_TYPE",
    "TypeDescriptor",
    "TypeList",
    "UnionType",
    "named_types",
]
