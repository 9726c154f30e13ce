"""Resolver interface and the per-trigger resolution pass."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from lhpipe.core.errors import LhpipeError, ResolveError
from lhpipe.triggers.model import (
    POSTSUBMIT,
    PRESUBMIT,
    TEKTON_PIPELINE_AGENT,
    JobSpec,
    Trigger,
    qualified_name,
)

logger = logging.getLogger(__name__)


class PipelineResolver(Protocol):
    """Turns a pipeline source file into its fully expanded document."""

    def resolve(self, path: Path) -> dict: ...


def load_trigger_pipelines(resolver: PipelineResolver, trigger: Trigger, dir: Path) -> None:
    """Resolve every job of a trigger that names a source file.

    Presubmits are resolved before postsubmits, each in file order, and the
    qualified names are appended to ``trigger.names`` in that order. Jobs
    without a source path are never resolved.
    """
    config = trigger.config
    for kind, jobs in ((PRESUBMIT, config.presubmits), (POSTSUBMIT, config.postsubmits)):
        for job in jobs:
            if job.source_path:
                path = Path(dir) / job.source_path
                document = _resolve(resolver, path)
                trigger.add_pipeline(qualified_name(kind, job.name), document)
            _default_agent(job)


def _resolve(resolver: PipelineResolver, path: Path) -> dict:
    logger.debug("resolving %s", path)
    try:
        document = resolver.resolve(path)
    except (LhpipeError, OSError, ValueError) as e:
        raise ResolveError(f"failed to load {path}: {e}") from e
    if document is None:
        raise ResolveError(f"failed to load {path}: resolver returned no pipeline")
    return document


def _default_agent(job: JobSpec) -> None:
    if not job.agent and job.pipeline_run_spec is not None:
        job.agent = TEKTON_PIPELINE_AGENT
