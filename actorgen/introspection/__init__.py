"""Introspection of module methods into structural signatures."""

from .base import (
    MethodHandle,
    MethodSignature,
    ParameterHandle,
    ParameterKind,
    ParameterSignature,
    TypeHandle,
    introspect,
)
from .literals import render_literal
from .python import PythonMethod, PythonType, describe, reflect_type

__all__ = [
    "MethodHandle",
    "MethodSignature",
    "ParameterHandle",
    "ParameterKind",
    "ParameterSignature",
    "PythonMethod",
    "PythonType",
    "TypeHandle",
    "describe",
    "introspect",
    "reflect_type",
    "render_literal",
]
