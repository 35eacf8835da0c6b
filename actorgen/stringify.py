"""Render type descriptors and parameter lists as Python source text."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import TypeRenderError
from .introspection.base import MethodSignature, ParameterKind, TypeHandle
from .types import (
    PARENT,
    SELF,
    TOP_TYPE,
    BuiltinType,
    GenericType,
    IntersectionType,
    LiteralType,
    NamedType,
    TypeDescriptor,
    TypeList,
    UnionType,
)

VOID = BuiltinType("None")


class TypeStringifier:
    """Turns descriptors into annotation text scoped to a declaring type."""

    NULLABLE_FORMAT = "typing.Optional[{}]"
    UNION_SEPARATOR = " | "
    INTERSECTION_SEPARATOR = " & "

    def stringify(self, descriptor: TypeDescriptor, owner: TypeHandle) -> str:
        if isinstance(descriptor, UnionType):
            return self._join(descriptor.members, owner, self.UNION_SEPARATOR)
        if isinstance(descriptor, IntersectionType):
            return self._join(descriptor.members, owner, self.INTERSECTION_SEPARATOR)
        if isinstance(descriptor, TypeList):
            return "[" + ", ".join(self.stringify(m, owner) for m in descriptor.members) + "]"
        if isinstance(descriptor, GenericType):
            origin = self.stringify(descriptor.origin, owner)
            if descriptor.arguments:
                arguments = ", ".join(self.stringify(a, owner) for a in descriptor.arguments)
            else:
                arguments = "()"
            return self._nullable(f"{origin}[{arguments}]", descriptor.nullable)
        if isinstance(descriptor, LiteralType):
            text = "typing.Literal[" + ", ".join(descriptor.values) + "]"
            return self._nullable(text, descriptor.nullable)
        if isinstance(descriptor, BuiltinType):
            return self._nullable(descriptor.name, descriptor.nullable)
        if isinstance(descriptor, NamedType):
            text = self._resolve_name(descriptor.name, owner)
            # The top type already admits None.
            return self._nullable(text, descriptor.nullable and descriptor.name != TOP_TYPE)
        raise TypeRenderError(f"Unsupported type descriptor {descriptor!r}")

    def return_hint(self, descriptor: Optional[TypeDescriptor], owner: TypeHandle) -> str:
        """Render `` -> T``, or empty text when no return type was declared."""
        if descriptor is None:
            return ""
        return " -> " + self.stringify(descriptor, owner)

    def parameters(self, signature: MethodSignature) -> str:
        """Render the parameter list of the wrapper, receiver included."""
        owner = signature.declaring_type
        rendered: List[str] = ["self"]
        kinds = [param.kind for param in signature.parameters]
        for index, param in enumerate(signature.parameters):
            if param.kind is ParameterKind.KEYWORD_ONLY and (
                index == 0 or kinds[index - 1] not in _KEYWORD_OPENERS
            ):
                rendered.append("*")
            prefix = _STAR_PREFIX.get(param.kind, "")
            text = prefix + param.name
            if param.annotation is not None:
                text += ": " + self.stringify(param.annotation, owner)
            if param.optional:
                separator = " = " if param.annotation is not None else "="
                text += f"{separator}{param.default}"
            rendered.append(text)
            if param.kind is ParameterKind.POSITIONAL_ONLY and (
                index + 1 == len(kinds) or kinds[index + 1] is not ParameterKind.POSITIONAL_ONLY
            ):
                rendered.append("/")
        return ", ".join(rendered)

    def _resolve_name(self, name: str, owner: TypeHandle) -> str:
        if name == SELF:
            return owner.name
        if name == PARENT:
            parent = owner.parent()
            if parent is None:
                raise TypeRenderError(
                    f"Cannot resolve 'parent' for {owner.name}: the type has no parent class"
                )
            return parent.name
        return name

    def _join(self, members: Iterable[TypeDescriptor], owner: TypeHandle, separator: str) -> str:
        return separator.join(self.stringify(member, owner) for member in members)

    def _nullable(self, text: str, nullable: bool) -> str:
        return self.NULLABLE_FORMAT.format(text) if nullable else text


def is_void(descriptor: Optional[TypeDescriptor]) -> bool:
    """Return True when the declared return type is ``None``."""
    return descriptor == VOID


_STAR_PREFIX = {ParameterKind.VAR_POSITIONAL: "*", ParameterKind.VAR_KEYWORD: "**"}
_KEYWORD_OPENERS = (ParameterKind.VAR_POSITIONAL, ParameterKind.KEYWORD_ONLY)


__all__ = ["TypeStringifier", "VOID", "is_void"]
