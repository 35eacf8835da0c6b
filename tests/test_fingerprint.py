"""Tests for the change-detection fingerprint."""

from __future__ import annotations

from actorgen.fingerprint import fingerprint, public_methods
from tests._fixtures.sample_modules import Browser, ModuleA, ModuleB

RAW_MODULES = {"enabled": ["pkg.ModuleA", {"pkg.ModuleB": {"page": "x"}}]}


def _modules() -> dict[str, object]:
    return {"pkg.ModuleA": ModuleA(), "pkg.ModuleB": ModuleB()}


def test_public_methods_are_sorted_and_public() -> None:
    assert public_methods(ModuleB()) == ["click", "seeText"]


def test_fingerprint_is_deterministic() -> None:
    first = fingerprint(_modules(), RAW_MODULES, ["pkg.Decorator"], version="1.0")
    second = fingerprint(_modules(), RAW_MODULES, ["pkg.Decorator"], version="1.0")

    assert first == second
    assert len(first) == 64


def test_fingerprint_changes_with_every_input() -> None:
    baseline = fingerprint(_modules(), RAW_MODULES, ["pkg.Decorator"], version="1.0")

    changed_methods = {"pkg.ModuleA": Browser(), "pkg.ModuleB": ModuleB()}
    assert fingerprint(changed_methods, RAW_MODULES, ["pkg.Decorator"], version="1.0") != baseline
    assert fingerprint(_modules(), {"enabled": ["pkg.ModuleA"]}, ["pkg.Decorator"], version="1.0") != baseline
    assert fingerprint(_modules(), RAW_MODULES, [], version="1.0") != baseline
    assert fingerprint(_modules(), RAW_MODULES, ["pkg.Decorator"], version="2.0") != baseline


def test_fingerprint_is_sensitive_to_module_order() -> None:
    modules = _modules()
    reordered = dict(reversed(list(modules.items())))

    assert fingerprint(modules, RAW_MODULES) != fingerprint(reordered, RAW_MODULES)


def test_fingerprint_accepts_decorator_objects() -> None:
    from actorgen.decorators import TryTo

    assert fingerprint(_modules(), RAW_MODULES, [TryTo]) == fingerprint(
        _modules(), RAW_MODULES, ["actorgen.decorators.TryTo"]
    )
