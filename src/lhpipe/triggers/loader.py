"""Trigger discovery — scan .lighthouse directories for triggers.yaml files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from lhpipe.core.errors import LhpipeError, TriggerLoadError
from lhpipe.resolve.adapter import PipelineResolver, load_trigger_pipelines
from lhpipe.triggers.model import TRIGGERS_FILE, Trigger, load_trigger_config

logger = logging.getLogger(__name__)

LIGHTHOUSE_DIR = ".lighthouse"


def find_lighthouse_dirs(root_dir: Path, recursive: bool = False) -> list[Path]:
    """Return the .lighthouse directories to scan under root_dir.

    Without ``recursive`` this is just ``<root>/.lighthouse`` (whether or not
    it exists; reading it reports the error). With ``recursive`` every
    directory named .lighthouse below root_dir is returned in walk order.
    """
    root = Path(root_dir)
    if not recursive:
        return [root / LIGHTHOUSE_DIR]

    if not root.is_dir():
        raise TriggerLoadError(f"failed to read dir {root}: not a directory")

    found: list[Path] = []

    def _raise(err: OSError) -> None:
        raise TriggerLoadError(f"failed to read dir {err.filename}: {err.strerror}") from err

    for dirpath, dirnames, _filenames in os.walk(root, onerror=_raise):
        dirnames.sort()
        if os.path.basename(dirpath) == LIGHTHOUSE_DIR:
            found.append(Path(dirpath))
    return found


class TriggerLoader:
    """Collects Trigger records and resolves their pipelines.

    Triggers are appended in discovery order; the list is complete before
    anything selects from it.
    """

    def __init__(self, resolver: PipelineResolver):
        self.resolver = resolver
        self.triggers: list[Trigger] = []

    def load(self, root_dir: Path, recursive: bool = False) -> list[Trigger]:
        for lighthouse_dir in find_lighthouse_dirs(root_dir, recursive):
            self.process_dir(lighthouse_dir)
        return self.triggers

    def process_dir(self, dir: Path) -> None:
        """Load every ``<dir>/<name>/triggers.yaml`` where name is not hidden."""
        dir = Path(dir)
        logger.debug("scanning %s", dir)
        try:
            entries = sorted(dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise TriggerLoadError(f"failed to read dir {dir}: {e}") from e

        for entry in entries:
            if entry.name.startswith(".") or not entry.is_dir():
                continue

            triggers_file = entry / TRIGGERS_FILE
            if not triggers_file.is_file():
                continue

            config = load_trigger_config(triggers_file)
            trigger = Trigger(path=str(triggers_file), config=config)
            self.triggers.append(trigger)
            logger.debug("loaded trigger config %s", triggers_file)

            try:
                load_trigger_pipelines(self.resolver, trigger, entry)
            except LhpipeError as e:
                raise TriggerLoadError(
                    f"failed to load pipelines for trigger: {triggers_file}: {e}"
                ) from e
