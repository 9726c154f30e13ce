"""Local uses resolver — expands ``image: uses:<ref>`` steps from files on disk.

A step such as::

    - name: build
      image: uses:jenkins-x/jx3-pipeline-catalog/tasks/go/pullrequest.yaml@v1.2.3

is replaced by the steps of the referenced file. References starting with
``./`` or ``../`` are read relative to the referencing file; anything else is
``<owner>/<repo>/<path>@<version>`` and is read from
``<cache_dir>/<owner>/<repo>/<version>/<path>``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from lhpipe.core.errors import ResolveError

logger = logging.getLogger(__name__)

USES_PREFIX = "uses:"
DEFAULT_VERSION = "HEAD"
DEFAULT_CACHE_DIR = Path(".lhpipe") / "cache"

# Task name used when a bare Task is wrapped into a PipelineRun
DEFAULT_TASK_NAME = "from-build-pack"

PIPELINE_RUN_API_VERSION = "tekton.dev/v1beta1"


@dataclass
class ResolverOptions:
    """Where pipeline sources and cached step libraries live."""

    dir: Path = Path(".")
    cache_dir: Path | None = None

    def effective_cache_dir(self) -> Path:
        if self.cache_dir is not None:
            return Path(self.cache_dir)
        return Path(self.dir) / DEFAULT_CACHE_DIR

    def create_resolver(self) -> UsesResolver:
        return UsesResolver(self)


class UsesResolver:
    """Loads a pipeline file and inlines every uses: step it references."""

    def __init__(self, options: ResolverOptions | None = None):
        self.options = options or ResolverOptions()
        self._documents: dict[Path, dict] = {}

    def resolve(self, path: Path) -> dict:
        path = Path(path)
        run = to_pipeline_run(self._load(path), path)
        for steps in _step_lists(run):
            steps[:] = self._expand_steps(steps, path, chain=(path.resolve(),))
        return run

    # -- loading --

    def _load(self, path: Path) -> dict:
        key = path.resolve()
        if key not in self._documents:
            try:
                data = yaml.safe_load(path.read_text(encoding="utf-8"))
            except OSError as e:
                raise ResolveError(f"failed to read pipeline file {path}: {e}") from e
            except (yaml.YAMLError, UnicodeDecodeError) as e:
                raise ResolveError(f"failed to parse pipeline file {path}: {e}") from e
            if not isinstance(data, dict):
                raise ResolveError(f"pipeline file {path} is not a YAML mapping")
            self._documents[key] = data
        return copy.deepcopy(self._documents[key])

    def locate(self, ref: str, referrer: Path) -> Path:
        """Map a uses: reference to the file it points at."""
        if ref.startswith("./") or ref.startswith("../"):
            return Path(referrer).parent / ref

        source, _, version = ref.partition("@")
        parts = source.split("/", 2)
        if len(parts) < 3 or not all(parts):
            raise ResolveError(
                f"invalid uses reference {ref!r} in {referrer}: "
                "expected <owner>/<repo>/<path>[@<version>]"
            )
        owner, repo, file_path = parts
        return self.options.effective_cache_dir() / owner / repo / (version or DEFAULT_VERSION) / file_path

    # -- expansion --

    def _expand_steps(self, steps: list, referrer: Path, chain: tuple[Path, ...]) -> list:
        expanded: list = []
        for step in steps:
            image = step.get("image", "") if isinstance(step, dict) else ""
            if not isinstance(image, str) or not image.startswith(USES_PREFIX):
                expanded.append(step)
                continue
            expanded.extend(self._inline(step, image[len(USES_PREFIX):].strip(), referrer, chain))
        return expanded

    def _inline(self, step: dict, ref: str, referrer: Path, chain: tuple[Path, ...]) -> list:
        target = self.locate(ref, referrer)
        key = target.resolve()
        if key in chain:
            cycle = " -> ".join(str(p) for p in (*chain, key))
            raise ResolveError(f"uses cycle detected: {cycle}")

        logger.debug("inlining %s into %s", target, referrer)
        source = to_pipeline_run(self._load(target), target)
        source_steps: list = []
        for steps in _step_lists(source):
            source_steps = steps
            break
        source_steps = self._expand_steps(source_steps, target, chain + (key,))

        overrides = {k: v for k, v in step.items() if k not in ("image", "name")}
        name = step.get("name")
        if name:
            matches = [s for s in source_steps if isinstance(s, dict) and s.get("name") == name]
            if not matches:
                raise ResolveError(f"no step named {name!r} in {target} (used by {referrer})")
            source_steps = matches[:1]

        inlined = []
        for s in source_steps:
            merged = dict(s)
            merged.update(copy.deepcopy(overrides))
            inlined.append(merged)
        return inlined


def to_pipeline_run(document: dict, path: Path) -> dict:
    """Normalize a Pipeline, Task or PipelineRun document to a PipelineRun.

    Raises ResolveError when the spec, pipelineSpec, tasks or taskSpec of the
    result do not have the expected mapping/list shape.
    """
    kind = document.get("kind", "")
    spec = document.get("spec") or {}
    if not isinstance(spec, dict):
        raise ResolveError(f"invalid {kind or 'document'} in {path}: spec must be a mapping")

    if kind == "PipelineRun":
        run = document
    elif kind in ("Pipeline", "Task"):
        metadata = document.get("metadata") or {}
        if not isinstance(metadata, dict):
            raise ResolveError(f"invalid {kind} in {path}: metadata must be a mapping")
        if kind == "Pipeline":
            pipeline_spec = spec
        else:
            pipeline_spec = {"tasks": [{"name": DEFAULT_TASK_NAME, "taskSpec": spec}]}
        run = {
            "apiVersion": document.get("apiVersion") or PIPELINE_RUN_API_VERSION,
            "kind": "PipelineRun",
            "metadata": dict(metadata),
            "spec": {"pipelineSpec": pipeline_spec},
        }
    else:
        raise ResolveError(f"unsupported kind {kind!r} in {path}: expected PipelineRun, Pipeline or Task")

    _check_shape(run, path)
    return run


def _check_shape(run: dict, path: Path) -> None:
    pipeline_spec = (run.get("spec") or {}).get("pipelineSpec") or {}
    if not isinstance(pipeline_spec, dict):
        raise ResolveError(f"invalid PipelineRun in {path}: spec.pipelineSpec must be a mapping")
    tasks = pipeline_spec.get("tasks") or []
    if not isinstance(tasks, list):
        raise ResolveError(f"invalid PipelineRun in {path}: pipelineSpec.tasks must be a list")
    for task in tasks:
        if not isinstance(task, dict):
            raise ResolveError(f"invalid PipelineRun in {path}: each task must be a mapping")
        name = task.get("name")
        task_spec = task.get("taskSpec")
        if task_spec is not None and not isinstance(task_spec, dict):
            raise ResolveError(f"invalid PipelineRun in {path}: taskSpec of task {name!r} must be a mapping")
        steps = (task_spec or {}).get("steps")
        if steps is not None and not isinstance(steps, list):
            raise ResolveError(f"invalid PipelineRun in {path}: steps of task {name!r} must be a list")


def _step_lists(run: dict):
    """Yield each task's steps list from a PipelineRun, in task order."""
    pipeline_spec = (run.get("spec") or {}).get("pipelineSpec") or {}
    for task in pipeline_spec.get("tasks") or []:
        task_spec = task.get("taskSpec") if isinstance(task, dict) else None
        if not isinstance(task_spec, dict):
            continue
        steps = task_spec.get("steps")
        if isinstance(steps, list):
            yield steps
