"""Classify actions into step kinds by naming convention."""

from __future__ import annotations

from enum import Enum


class StepKind(Enum):
    """Step wrapper variants; values name classes in :mod:`actorgen.step`."""

    ASSERTION = "Assertion"
    CONDITION = "Condition"
    ACTION = "Action"


def classify(action: str) -> StepKind:
    """Map an action name to its step kind (``see*``, ``am*``, everything else)."""
    if action.startswith("see"):
        return StepKind.ASSERTION
    if action.startswith("am"):
        return StepKind.CONDITION
    return StepKind.ACTION


__all__ = ["StepKind", "classify"]
