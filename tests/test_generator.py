"""Tests for the actions generator."""

from __future__ import annotations

import pathlib
import types
import typing

import pytest

from actorgen.config import ActorSettings
from actorgen.decorators import ConditionalAssertion, TryTo
from actorgen.errors import ConfigurationError, TypeRenderError
from actorgen.generator import ActionsGenerator, read_stamp
from actorgen.modules import ModuleContainer
from actorgen.step import Scenario
from tests._fixtures.sample_modules import Archive, Browser, Color, Standalone

FIXTURES = "tests._fixtures.sample_modules"


def _load(source: str) -> type:
    module = types.ModuleType("generated_actions")
    exec(compile(source, "<generated>", "exec"), module.__dict__)
    return module.AcceptanceTesterActions


def _actor(actions_cls: type, container: ModuleContainer):
    class AcceptanceTester(actions_cls):
        def __init__(self) -> None:
            self.scenario = Scenario(container)

        def get_scenario(self) -> Scenario:
            return self.scenario

    return AcceptanceTester()


def test_generates_click_and_see_text(settings: ActorSettings, container: ModuleContainer) -> None:
    generator = ActionsGenerator(settings, container.all(), {
        "click": f"{FIXTURES}.ModuleA",
        "seeText": f"{FIXTURES}.ModuleB",
    })

    result = generator.generate()

    assert result.num_methods == 2
    assert generator.num_methods == 2
    source = result.source
    assert "def click(self, selector: str) -> None:" in source
    assert '        self.get_scenario().run_step(_step.Action("click", [selector], {}))' in source
    assert "def seeText(self, text: str, context: str = 'body') -> bool:" in source
    assert 'return self.get_scenario().run_step(_step.Assertion("seeText", [text, context], {}))' in source
    assert source.index("def click") < source.index("def seeText")
    assert f"See :meth:`{FIXTURES}.ModuleA.click`." in source
    assert "Click on an element." in source
    assert "class AcceptanceTesterActions(abc.ABC):" in source


def test_generated_source_runs_steps(settings: ActorSettings, container: ModuleContainer) -> None:
    source = ActionsGenerator(settings, container.all(), container.actions()).produce()
    tester = _actor(_load(source), container)

    tester.click("#login")
    assert tester.seeText("Welcome") is True
    assert tester.seeText("Goodbye", context="main") is False

    module_a = container.get(f"{FIXTURES}.ModuleA")
    assert module_a.clicks == ["#login"]
    assert [step.kind for step in tester.scenario.steps] == ["Action", "Assertion", "Assertion"]
    assert str(tester.scenario.steps[2]) == "seeText('Goodbye', 'main')"


def test_first_module_claiming_an_action_wins(settings: ActorSettings, container: ModuleContainer) -> None:
    actions = [
        ("click", f"{FIXTURES}.ModuleA"),
        ("seeText", f"{FIXTURES}.ModuleB"),
        ("click", f"{FIXTURES}.ModuleB"),
    ]
    generator = ActionsGenerator(settings, container.all(), actions)

    source = generator.produce()

    assert generator.num_methods == 2
    assert source.count("def click(") == 1
    assert f"{FIXTURES}.ModuleA.click" in source
    assert f"{FIXTURES}.ModuleB.click" not in source


def test_stamp_matches_fingerprint(settings: ActorSettings, container: ModuleContainer) -> None:
    generator = ActionsGenerator(settings, container.all(), container.actions())

    result = generator.generate()

    assert result.source.startswith(f"# [STAMP] {result.fingerprint}\n")
    assert read_stamp(result.source) == result.fingerprint == generator.fingerprint()
    assert read_stamp("print('hand written')") is None


def test_missing_module_aborts(settings: ActorSettings, container: ModuleContainer) -> None:
    generator = ActionsGenerator(settings, container.all(), {"click": "pkg.Unknown"})

    with pytest.raises(ConfigurationError, match="pkg.Unknown, which is not loaded"):
        generator.generate()
    assert generator.num_methods == 0


def test_missing_method_aborts(settings: ActorSettings, container: ModuleContainer) -> None:
    generator = ActionsGenerator(settings, container.all(), {"fly": f"{FIXTURES}.ModuleA"})

    with pytest.raises(ConfigurationError, match="has no method 'fly'"):
        generator.generate()


def test_parent_type_without_parent_aborts(settings: ActorSettings) -> None:
    container = ModuleContainer()
    container.create(Standalone)

    with pytest.raises(TypeRenderError):
        ActionsGenerator(settings, container.all(), container.actions()).generate()


def test_empty_actor_name_is_rejected(container: ModuleContainer) -> None:
    with pytest.raises(ConfigurationError):
        ActionsGenerator(ActorSettings(actor=""), container.all(), {})


def test_decorators_add_blocks_once(settings: ActorSettings) -> None:
    container = ModuleContainer()
    container.create(Browser)
    generator = ActionsGenerator(
        settings,
        container.all(),
        {"seeElement": f"{FIXTURES}.Browser", "scroll": f"{FIXTURES}.Browser"},
        decorators=[ConditionalAssertion, ConditionalAssertion, TryTo],
    )

    source = generator.produce()

    assert source.count("def canSeeElement(") == 1
    assert source.count("def try_to_scroll(") == 1
    assert "def tryToSeeElement(" not in source
    assert 'run_step(_step.ConditionalAssertion("seeElement", [selector], {}))' in source
    assert generator.num_methods == 2


def test_browser_surface_compiles_and_dispatches(settings: ActorSettings) -> None:
    container = ModuleContainer()
    browser = container.create(Browser)
    generator = ActionsGenerator(
        settings, container.all(), container.actions(), decorators=["actorgen.decorators.ConditionalAssertion"]
    )

    source = generator.produce()
    tester = _actor(_load(source), container)

    assert f"import {FIXTURES}\n" in source
    assert f"def reload(self) -> {FIXTURES}.BaseBrowser:" in source
    assert f"def parentFrame(self) -> {FIXTURES}.BaseBrowser:" in source
    assert f"target: {FIXTURES}.Page & {FIXTURES}.Frame" in source
    assert "fallback: typing.Any = None) -> typing.Optional[dict[str, int]]:" in source
    assert "Open a page (interface doc)." in source
    assert 'Backslashes \\\\ and \\"\\"\\"quotes\\"\\"\\" survive.' in source

    tester.amOnPage("/home")
    assert browser.visited == ["/home"]
    assert tester.grabAll("a", "b", strict=True) == ["a", "b"]
    assert tester.fill("name") is browser
    assert tester.scenario.steps[-1].keywords == {"color": Color.RED}
    assert tester.canSeeElement("missing") is None
    assert len(tester.scenario.failures) == 1
    assert tester.cantSeeElement("present") is None


def test_annotation_modules_are_imported(settings: ActorSettings) -> None:
    container = ModuleContainer()
    container.create(Archive)
    generator = ActionsGenerator(settings, container.all(), container.actions())

    source = generator.produce()
    actions_cls = _load(source)

    assert "import collections.abc\nimport pathlib\n" in source
    assert (
        "def unpack(self, path: pathlib.Path, entries: list, pair: tuple, "
        "callback: collections.abc.Callable) -> None:"
    ) in source
    hints = typing.get_type_hints(actions_cls.unpack)
    assert hints["path"] is pathlib.Path
    assert hints["pair"] is tuple
