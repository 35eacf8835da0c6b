"""Render default parameter values back into Python source text."""

from __future__ import annotations

from enum import Enum
import math
from types import BuiltinFunctionType, FunctionType
from typing import Any, Mapping, Optional, Set

from ..errors import TypeRenderError

_SCALARS = (type(None), bool, int, str, bytes, complex)


def render_literal(
    value: Any,
    imports: Set[str],
    *,
    module_name: Optional[str] = None,
    namespace: Optional[Mapping[str, Any]] = None,
) -> str:
    """Return source text that evaluates to ``value``.

    ``namespace`` is the globals of the module declaring the method; values
    that are not literals are looked up there by identity so constant
    references survive as ``module.NAME``. Modules the text refers to are
    added to ``imports``.
    """
    if isinstance(value, Enum):
        enum_type = type(value)
        imports.add(enum_type.__module__)
        return f"{_qualified(enum_type)}.{value.name}"
    if type(value) in _SCALARS:
        return repr(value)
    if type(value) is float:
        return _render_float(value)

    def nested(item: Any) -> str:
        return render_literal(item, imports, module_name=module_name, namespace=namespace)

    if type(value) is list:
        return "[" + ", ".join(nested(item) for item in value) + "]"
    if type(value) is tuple:
        if len(value) == 1:
            return f"({nested(value[0])},)"
        return "(" + ", ".join(nested(item) for item in value) + ")"
    if type(value) in (set, frozenset):
        # Set iteration order depends on hashing; sort for stable output.
        items = sorted(nested(item) for item in value)
        if type(value) is frozenset:
            return "frozenset({" + ", ".join(items) + "})" if items else "frozenset()"
        return "{" + ", ".join(items) + "}" if items else "set()"
    if type(value) is dict:
        pairs = (f"{nested(key)}: {nested(item)}" for key, item in value.items())
        return "{" + ", ".join(pairs) + "}"
    if isinstance(value, (type, FunctionType, BuiltinFunctionType)):
        reference = _reference(value, imports)
        if reference is not None:
            return reference

    if namespace is not None and module_name is not None:
        for name, candidate in namespace.items():
            if candidate is value and not name.startswith("__"):
                imports.add(module_name)
                return f"{module_name}.{name}"

    raise TypeRenderError(f"Cannot render default value {value!r} as source text")


def _render_float(value: float) -> str:
    if math.isnan(value):
        return 'float("nan")'
    if math.isinf(value):
        return 'float("inf")' if value > 0 else 'float("-inf")'
    return repr(value)


def _reference(value: Any, imports: Set[str]) -> Optional[str]:
    module = getattr(value, "__module__", None)
    qualname = getattr(value, "__qualname__", None)
    if not module or not qualname or "<" in qualname:
        return None
    if module == "builtins":
        return qualname
    imports.add(module)
    return f"{module}.{qualname}"


def _qualified(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = ["render_literal"]
