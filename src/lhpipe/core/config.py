"""Option resolution for the effective command — CLI > env > defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lhpipe.config import Settings


@dataclass
class EffectiveOptions:
    """Everything one ``lhpipe effective`` run needs to know.

    ``editor`` is populated from ``JX_EDITOR`` exactly once, when the
    options are built; nothing reads the environment afterwards.
    """

    dir: Path = Path(".")
    trigger_name: str = ""
    pipeline_name: str = ""
    out_file: str = ""
    editor: str = ""
    line: str = ""
    recursive: bool = False
    batch_mode: bool = False
    cache_dir: Path | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **values) -> EffectiveOptions:
        """Create options from CLI values, falling back to settings.

        Config precedence: explicit CLI values > env vars > class defaults.
        ``None`` and empty values are treated as "not given".
        """
        options = cls()

        if settings.editor:
            options.editor = settings.editor
        if settings.cache_dir is not None:
            options.cache_dir = Path(settings.cache_dir)

        for key, value in values.items():
            if not hasattr(options, key):
                raise TypeError(f"unknown option: {key}")
            if value is None or value == "":
                continue
            if key in ("dir", "cache_dir"):
                value = Path(value)
            setattr(options, key, value)

        return options

    @property
    def root_dir(self) -> Path:
        return Path(self.dir)
