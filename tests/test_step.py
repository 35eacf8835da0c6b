"""Tests for runtime steps and the scenario."""

from __future__ import annotations

import pytest

from actorgen.modules import ModuleContainer
from actorgen.step import Action, ConditionalAssertion, Retry, Scenario, TryTo
from tests._fixtures.sample_modules import Flaky


@pytest.fixture
def flaky_scenario() -> Scenario:
    container = ModuleContainer()
    container.create(Flaky)
    return Scenario(container)


def test_scenario_records_and_dispatches(flaky_scenario: Scenario) -> None:
    flaky_scenario.run_step(Action("press", ["enter"]))

    assert [str(step) for step in flaky_scenario.steps] == ["press('enter')"]
    assert repr(flaky_scenario.steps[0]) == "<Action press('enter')>"


def test_conditional_assertion_records_failure(flaky_scenario: Scenario) -> None:
    assert flaky_scenario.run_step(ConditionalAssertion("see_ready")) is None

    assert len(flaky_scenario.failures) == 1
    assert str(flaky_scenario.failures[0]) == "not ready yet"


def test_try_to_reports_success(flaky_scenario: Scenario) -> None:
    assert flaky_scenario.run_step(TryTo("press", ["enter"])) is True
    assert flaky_scenario.run_step(TryTo("press", ["bad"])) is False


def test_retry_reruns_until_success(flaky_scenario: Scenario) -> None:
    flaky_scenario.run_step(Retry("see_ready", interval=0))

    module = flaky_scenario.container.module_for_action("see_ready")
    assert module.attempts == 3


def test_retry_gives_up_after_retries(flaky_scenario: Scenario) -> None:
    with pytest.raises(AssertionError):
        flaky_scenario.run_step(Retry("see_ready", retries=1, interval=0))


def test_regular_step_propagates_errors(flaky_scenario: Scenario) -> None:
    with pytest.raises(ValueError):
        flaky_scenario.run_step(Action("press", ["bad"], {}))
