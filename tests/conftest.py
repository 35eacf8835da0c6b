from __future__ import annotations

from pathlib import Path

import pytest

from actorgen.config import ActorSettings
from actorgen.modules import ModuleContainer
from tests._fixtures.sample_modules import ModuleA, ModuleB


@pytest.fixture
def settings(tmp_path: Path) -> ActorSettings:
    """Actor settings rooted at the pytest tmp_path."""
    return ActorSettings(
        actor="AcceptanceTester",
        root=tmp_path,
        modules={"enabled": ["tests._fixtures.sample_modules.ModuleA", "tests._fixtures.sample_modules.ModuleB"]},
    )


@pytest.fixture
def container() -> ModuleContainer:
    """Container with ModuleA and ModuleB enabled, in that order."""
    modules = ModuleContainer()
    modules.create(ModuleA)
    modules.create(ModuleB, {"page": "Welcome back"})
    return modules
