"""Shared test fixtures for lhpipe."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from lhpipe.config import reset_settings
from lhpipe.core.errors import ResolveError

PIPELINE_RUN = {
    "apiVersion": "tekton.dev/v1beta1",
    "kind": "PipelineRun",
    "metadata": {"name": "pr"},
    "spec": {
        "pipelineSpec": {
            "tasks": [
                {
                    "name": "from-build-pack",
                    "taskSpec": {
                        "steps": [
                            {"name": "build", "image": "golang:1.21", "script": "make build"},
                        ],
                    },
                },
            ],
        },
    },
}


class FakeResolver:
    """Returns fixed documents by file name and records every call."""

    def __init__(self, documents: dict[str, dict] | None = None, fail: set[str] | None = None):
        self.documents = documents or {}
        self.fail = fail or set()
        self.calls: list[Path] = []

    def resolve(self, path: Path) -> dict:
        self.calls.append(Path(path))
        name = Path(path).name
        if name in self.fail:
            raise ResolveError(f"cannot resolve {name}")
        if name in self.documents:
            return self.documents[name]
        return {"kind": "PipelineRun", "metadata": {"name": name}}


class FakeInput:
    """Scripted answers for pick-lists; records each prompt."""

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.prompts: list[tuple[list[str], str]] = []

    def pick_name_with_default(self, names, message, default, help):
        self.prompts.append((list(names), message))
        return self.answers.pop(0) if self.answers else ""


class RecordingRunner:
    """CommandRunner that records commands instead of launching them."""

    def __init__(self, error: Exception | None = None):
        self.commands = []
        self.error = error

    def __call__(self, command) -> None:
        self.commands.append(command)
        if self.error is not None:
            raise self.error


def write_trigger(lighthouse_dir: Path, name: str, content: str) -> Path:
    """Write <lighthouse_dir>/<name>/triggers.yaml and return its path."""
    d = lighthouse_dir / name
    d.mkdir(parents=True, exist_ok=True)
    path = d / "triggers.yaml"
    path.write_text(textwrap.dedent(content))
    return path


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep JX_* settings from the developer's shell out of tests."""
    monkeypatch.delenv("JX_EDITOR", raising=False)
    monkeypatch.delenv("JX_CACHE_DIR", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fake_resolver():
    return FakeResolver({"pipeline.yaml": PIPELINE_RUN})


@pytest.fixture
def lighthouse_repo(tmp_path):
    """A repo with .lighthouse/pr (one presubmit) and .lighthouse/release."""
    lh = tmp_path / ".lighthouse"
    write_trigger(lh, "pr", """\
        apiVersion: config.lighthouse.jenkins-x.io/v1alpha1
        kind: TriggerConfig
        spec:
          presubmits:
          - name: pr
            context: pr
            always_run: true
            source: pipeline.yaml
    """)
    write_trigger(lh, "release", """\
        apiVersion: config.lighthouse.jenkins-x.io/v1alpha1
        kind: TriggerConfig
        spec:
          postsubmits:
          - name: release
            source: release.yaml
            branches:
            - ^main$
    """)
    return tmp_path


@pytest.fixture
def make_resolver():
    return FakeResolver


@pytest.fixture
def make_input():
    return FakeInput


@pytest.fixture
def recording_runner():
    return RecordingRunner()


@pytest.fixture
def trigger_writer():
    return write_trigger
