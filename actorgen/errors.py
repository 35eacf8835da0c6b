"""Exceptions raised while generating actor actions."""

from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for failures that abort a generation pass."""


class ConfigurationError(GenerationError):
    """Raised when modules, actions or step decorators are misconfigured."""


class TypeRenderError(GenerationError):
    """Raised when a type or default value cannot be rendered as source text."""


__all__ = ["ConfigurationError", "GenerationError", "TypeRenderError"]
