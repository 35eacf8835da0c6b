"""Tests for action classification."""

from __future__ import annotations

import pytest

from actorgen.classify import StepKind, classify


@pytest.mark.parametrize(
    ("action", "kind"),
    [
        ("seeElement", StepKind.ASSERTION),
        ("see_text", StepKind.ASSERTION),
        ("amOnPage", StepKind.CONDITION),
        ("click", StepKind.ACTION),
        ("dontSeeElement", StepKind.ACTION),
        ("SeeElement", StepKind.ACTION),
        ("oversee", StepKind.ACTION),
    ],
)
def test_classify_by_exact_prefix(action: str, kind: StepKind) -> None:
    assert classify(action) is kind


def test_kind_values_name_step_classes() -> None:
    assert [kind.value for kind in StepKind] == ["Assertion", "Condition", "Action"]
