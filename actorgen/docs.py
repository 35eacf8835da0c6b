"""Documentation lookup for generated wrappers."""

from __future__ import annotations

import inspect
from typing import Optional

from .introspection.base import TypeHandle

DOC_PLACEHOLDER = "*"


def resolve_doc(method_name: str, own_doc: Optional[str], declaring: TypeHandle) -> Optional[str]:
    """Return the nearest documentation for ``method_name``.

    Lookup order: the declaration itself, then each interface the declaring
    type implements directly (the first one exposing the method wins, even
    when it is undocumented), then the immediate parent type. Only one
    level of each is consulted.
    """
    if own_doc:
        return own_doc

    doc: Optional[str] = None
    for interface in declaring.interfaces():
        method = interface.find_method(method_name)
        if method is not None:
            doc = method.doc()
            break
    if doc:
        return doc

    parent = declaring.parent()
    if parent is not None:
        method = parent.find_method(method_name)
        if method is not None:
            return method.doc()
    return doc


def format_doc(doc: Optional[str], indent: str = "") -> str:
    """Prepare raw documentation for embedding in a generated docstring.

    Continuation lines are indented with ``indent``; the first line is left
    bare because the template already positions it.
    """
    text = inspect.cleandoc(doc) if doc else ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if not text.strip():
        return DOC_PLACEHOLDER
    lines = text.splitlines()
    return "\n".join([lines[0]] + [indent + line if line else "" for line in lines[1:]])


__all__ = ["DOC_PLACEHOLDER", "format_doc", "resolve_doc"]
