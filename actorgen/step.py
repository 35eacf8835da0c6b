"""Runtime steps recorded and executed by generated actor methods."""

from __future__ import annotations

import time
from typing import Any, List, Mapping, Optional, Sequence

from .logging import get_logger
from .modules import ModuleContainer

logger = get_logger("step")


class Step:
    """A recorded invocation of an action."""

    def __init__(
        self,
        action: str,
        arguments: Sequence[Any] = (),
        keywords: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.action = action
        self.arguments = list(arguments)
        self.keywords = dict(keywords or {})

    @property
    def kind(self) -> str:
        return type(self).__name__

    def run(self, container: ModuleContainer) -> Any:
        module = container.module_for_action(self.action)
        return getattr(module, self.action)(*self.arguments, **self.keywords)

    def __str__(self) -> str:
        rendered = [repr(argument) for argument in self.arguments]
        rendered.extend(f"{key}={value!r}" for key, value in self.keywords.items())
        return f"{self.action}({', '.join(rendered)})"

    def __repr__(self) -> str:
        return f"<{self.kind} {self}>"


class Action(Step):
    pass


class Assertion(Step):
    pass


class Condition(Step):
    pass


class ConditionalAssertion(Assertion):
    """Assertion whose failure is recorded instead of stopping the test."""

    failure: Optional[AssertionError] = None

    def run(self, container: ModuleContainer) -> Any:
        try:
            return super().run(container)
        except AssertionError as exc:
            self.failure = exc
            logger.debug("Conditional assertion %s failed: %s", self, exc)
            return None


class TryTo(Step):
    """Runs the action and reports whether it succeeded."""

    def run(self, container: ModuleContainer) -> bool:
        try:
            super().run(container)
        except Exception as exc:
            logger.debug("Step %s failed: %s", self, exc)
            return False
        return True


class Retry(Step):
    """Re-runs the action on assertion failures before giving up."""

    DEFAULT_RETRIES = 3
    DEFAULT_INTERVAL = 200

    def __init__(
        self,
        action: str,
        arguments: Sequence[Any] = (),
        keywords: Optional[Mapping[str, Any]] = None,
        *,
        retries: int = DEFAULT_RETRIES,
        interval: int = DEFAULT_INTERVAL,
    ) -> None:
        super().__init__(action, arguments, keywords)
        self.retries = retries
        self.interval = interval

    def run(self, container: ModuleContainer) -> Any:
        attempt = 0
        while True:
            try:
                return super().run(container)
            except AssertionError:
                if attempt >= self.retries:
                    raise
                attempt += 1
                logger.debug("Retrying %s (%d/%d)", self, attempt, self.retries)
                time.sleep(self.interval / 1000)


class Scenario:
    """Records the steps of one test and dispatches them to enabled modules."""

    def __init__(self, container: ModuleContainer) -> None:
        self.container = container
        self.steps: List[Step] = []

    def run_step(self, step: Step) -> Any:
        self.steps.append(step)
        return step.run(self.container)

    @property
    def failures(self) -> List[AssertionError]:
        return [
            step.failure
            for step in self.steps
            if isinstance(step, ConditionalAssertion) and step.failure is not None
        ]


__all__ = [
    "Action",
    "Assertion",
    "Condition",
    "ConditionalAssertion",
    "Retry",
    "Scenario",
    "Step",
    "TryTo",
]
