"""Tests for placeholder templates."""

from __future__ import annotations

from pathlib import Path

import pytest

from actorgen.errors import ConfigurationError
from actorgen.template import Template


def test_place_returns_new_template() -> None:
    base = Template("Hello {{ who }} from {{ where }}")
    bound = base.place("who", "world")

    assert base.get_var("who") is None
    assert bound.get_var("who") == "world"
    assert bound.place("where", "here").produce() == "Hello world from here"


def test_values_are_not_evaluated_as_templates() -> None:
    template = Template("{{ value }}").place("value", "{{ 1 + 1 }} {% if x %}")

    assert template.produce() == "{{ 1 + 1 }} {% if x %}"


def test_unknown_placeholder_is_rejected() -> None:
    with pytest.raises(ConfigurationError, match="no placeholder 'other'"):
        Template("{{ name }}").place("other", "x")


def test_unbound_placeholder_fails_to_produce() -> None:
    with pytest.raises(ConfigurationError, match="unbound placeholders: b"):
        Template("{{ a }}{{ b }}").place("a", "1").produce()


@pytest.mark.parametrize(
    "source",
    ["{% if x %}y{% endif %}", "{{ x | upper }}", "{{ x.attr }}", "{{ call() }}"],
)
def test_only_plain_substitutions_are_allowed(source: str) -> None:
    with pytest.raises(ConfigurationError, match="may only contain placeholders"):
        Template(source)


def test_load_prefers_custom_templates_dir(tmp_path: Path) -> None:
    (tmp_path / "method.py.j2").write_text("custom {{ action }}\n", encoding="utf-8")

    custom = Template.load("method.py.j2", tmp_path)
    bundled = Template.load("actions.py.j2")

    assert custom.placeholders == {"action"}
    assert custom.place("action", "click").produce() == "custom click\n"
    assert bundled.placeholders == {"hash", "name", "imports", "methods"}


def test_missing_template_raises_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        Template.load("nope.j2", tmp_path)
