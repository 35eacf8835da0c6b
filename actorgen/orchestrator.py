"""Build orchestration: staleness checks and atomic output replacement."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import tempfile
from typing import Optional

from .config import ActorSettings, load_config
from .generator import ActionsGenerator, read_stamp
from .logging import get_logger
from .modules import ModuleContainer


@dataclass
class BuildOutcome:
    """Result of building one actor's actions module."""

    path: Path
    fingerprint: str
    num_methods: int
    skipped: bool


class ActorBuilder:
    """Loads modules for an actor and regenerates its actions when they changed."""

    def __init__(self) -> None:
        self.logger = get_logger("orchestrator")

    def build_from_path(self, config_path: Path, *, force: bool = False) -> BuildOutcome:
        return self.build(load_config(config_path), force=force)

    def build(self, settings: ActorSettings, *, force: bool = False) -> BuildOutcome:
        output = settings.output_path()
        self.logger.info("Building %s actions into %s", settings.actor, output)
        generator = self._create_generator(settings)

        stamp = generator.fingerprint()
        previous = self._read_previous_stamp(output)
        if not force and previous == stamp:
            self.logger.info("%s actions are up to date", settings.actor)
            return BuildOutcome(path=output, fingerprint=stamp, num_methods=0, skipped=True)

        result = generator.generate()
        self._write_atomic(output, result.source)
        return BuildOutcome(
            path=output,
            fingerprint=result.fingerprint,
            num_methods=result.num_methods,
            skipped=False,
        )

    def fingerprint(self, settings: ActorSettings) -> str:
        return self._create_generator(settings).fingerprint()

    def _create_generator(self, settings: ActorSettings) -> ActionsGenerator:
        container = ModuleContainer.from_settings(settings)
        self.logger.debug(
            "Loaded %d modules providing %d actions",
            len(container.all()),
            len(container.actions()),
        )
        return ActionsGenerator(settings, container.all(), container.actions())

    @staticmethod
    def _read_previous_stamp(output: Path) -> Optional[str]:
        try:
            return read_stamp(output.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None

    @staticmethod
    def _write_atomic(output: Path, source: str) -> None:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(prefix=f".{output.name}.", suffix=".tmp", dir=output.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(source)
            os.replace(temp_name, output)
        except BaseException:
            Path(temp_name).unlink(missing_ok=True)
            raise


__all__ = ["ActorBuilder", "BuildOutcome"]
