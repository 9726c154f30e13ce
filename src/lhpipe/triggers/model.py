"""Trigger configuration models — triggers.yaml and the in-memory Trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from lhpipe.core.errors import TriggerLoadError

TRIGGERS_FILE = "triggers.yaml"

PRESUBMIT = "presubmit"
POSTSUBMIT = "postsubmit"

# Agent name lighthouse gives jobs that carry an inline pipeline run spec
TEKTON_PIPELINE_AGENT = "tekton-pipeline"

_KNOWN_JOB_KEYS = ("name", "source", "source-path", "pipeline_run_spec", "agent")


@dataclass
class JobSpec:
    """A single presubmit or postsubmit entry of a trigger config."""

    name: str
    source_path: str = ""
    pipeline_run_spec: dict | None = None
    agent: str = ""
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> JobSpec:
        name = data.get("name")
        if not name or not isinstance(name, str):
            raise ValueError(f"job entry has no name: {data!r}")
        source_path = data.get("source") or data.get("source-path") or ""
        return cls(
            name=name,
            source_path=str(source_path),
            pipeline_run_spec=data.get("pipeline_run_spec"),
            agent=data.get("agent") or "",
            extra={k: v for k, v in data.items() if k not in _KNOWN_JOB_KEYS},
        )


@dataclass
class TriggerConfig:
    """Parsed triggers.yaml: ordered presubmit and postsubmit jobs."""

    presubmits: list[JobSpec] = field(default_factory=list)
    postsubmits: list[JobSpec] = field(default_factory=list)
    api_version: str = ""
    kind: str = ""

    @classmethod
    def from_dict(cls, data: dict | None) -> TriggerConfig:
        """Build a config from a parsed document.

        Accepts the ``spec:`` wrapped layout used by lighthouse as well as
        bare top-level ``presubmits``/``postsubmits``.
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("trigger config must be a mapping")

        spec = data.get("spec")
        if spec is None:
            spec = data
        if not isinstance(spec, dict):
            raise ValueError("trigger config spec must be a mapping")

        return cls(
            presubmits=_parse_jobs(spec.get("presubmits"), PRESUBMIT),
            postsubmits=_parse_jobs(spec.get("postsubmits"), POSTSUBMIT),
            api_version=data.get("apiVersion", ""),
            kind=data.get("kind", ""),
        )


def _parse_jobs(entries: Any, kind: str) -> list[JobSpec]:
    if not entries:
        return []
    if not isinstance(entries, list):
        raise ValueError(f"{kind}s must be a list")

    jobs: list[JobSpec] = []
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValueError(f"{kind} entry must be a mapping: {entry!r}")
        job = JobSpec.from_dict(entry)
        if job.name in seen:
            raise ValueError(f"duplicate {kind} name: {job.name}")
        seen.add(job.name)
        jobs.append(job)
    return jobs


def load_trigger_config(path: Path) -> TriggerConfig:
    """Parse a triggers.yaml file into a TriggerConfig."""
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise TriggerLoadError(f"failed to read {path}: {e}") from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise TriggerLoadError(f"failed to load {path}: {e}") from e

    try:
        return TriggerConfig.from_dict(data)
    except ValueError as e:
        raise TriggerLoadError(f"failed to load {path}: {e}") from e


def qualified_name(kind: str, name: str) -> str:
    """Return the ``<kind>/<name>`` identifier used for selection and display."""
    return f"{kind}/{name}"


@dataclass
class Trigger:
    """One discovered triggers.yaml and the pipelines resolved from it."""

    path: str
    config: TriggerConfig
    names: list[str] = field(default_factory=list)
    pipelines: dict[str, dict] = field(default_factory=dict)

    def add_pipeline(self, name: str, document: dict) -> None:
        self.names.append(name)
        self.pipelines[name] = document
