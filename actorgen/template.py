"""Placeholder templates used to assemble generated source."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound, TemplateSyntaxError, meta, nodes

from .errors import ConfigurationError

TEMPLATES_DIR = Path(__file__).with_name("templates")


class Template:
    """Immutable ``{{ placeholder }}`` template.

    Only bare variable substitutions are allowed; blocks, filters, calls and
    attribute access are rejected when the template is parsed. ``place``
    returns a new template, so a partially bound template can be handed to
    step decorators without being affected by what they bind.
    """

    def __init__(
        self,
        source: str,
        *,
        name: str = "<string>",
        env: Environment | None = None,
        variables: Mapping[str, Any] | None = None,
    ) -> None:
        env = env or _create_env(None)
        try:
            tree = env.parse(source, name=name)
        except TemplateSyntaxError as exc:
            raise ConfigurationError(f"Template {name} is invalid: {exc}") from exc
        _ensure_plain(tree, name)
        self.name = name
        self._placeholders: FrozenSet[str] = frozenset(meta.find_undeclared_variables(tree))
        self._compiled = env.from_string(source)
        self._vars: Dict[str, Any] = {}
        for key, value in (variables or {}).items():
            self._check_key(key)
            self._vars[key] = value

    @classmethod
    def load(cls, name: str, templates_dir: Path | None = None) -> "Template":
        """Load a template file, preferring ``templates_dir`` over the bundled ones."""
        env = _create_env(templates_dir)
        try:
            source, _, _ = env.loader.get_source(env, name)  # type: ignore[union-attr]
        except TemplateNotFound as exc:
            raise ConfigurationError(f"Template {name} not found") from exc
        return cls(source, name=name, env=env)

    @property
    def placeholders(self) -> FrozenSet[str]:
        return self._placeholders

    def place(self, key: str, value: Any) -> "Template":
        self._check_key(key)
        clone = object.__new__(Template)
        clone.name = self.name
        clone._placeholders = self._placeholders
        clone._compiled = self._compiled
        clone._vars = {**self._vars, key: value}
        return clone

    def get_var(self, key: str, default: Optional[Any] = None) -> Any:
        return self._vars.get(key, default)

    def produce(self) -> str:
        missing = sorted(self._placeholders - self._vars.keys())
        if missing:
            raise ConfigurationError(
                f"Template {self.name} has unbound placeholders: {', '.join(missing)}"
            )
        return self._compiled.render(**self._vars)

    def _check_key(self, key: str) -> None:
        if key not in self._placeholders:
            raise ConfigurationError(f"Template {self.name} has no placeholder '{key}'")


@lru_cache(maxsize=None)
def _create_env(templates_dir: Path | None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(TEMPLATES_DIR))
    # ensure uniqueness preserving order
    ordered = list(dict.fromkeys(directories))
    return Environment(
        loader=FileSystemLoader(ordered),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )


def _ensure_plain(tree: nodes.Template, name: str) -> None:
    for node in tree.body:
        if not isinstance(node, nodes.Output):
            raise ConfigurationError(
                f"Template {name} may only contain placeholders, found {type(node).__name__}"
            )
        for child in node.nodes:
            if not isinstance(child, (nodes.TemplateData, nodes.Name)):
                raise ConfigurationError(
                    f"Template {name} may only contain placeholders, found {type(child).__name__}"
                )


__all__ = ["TEMPLATES_DIR", "Template"]
