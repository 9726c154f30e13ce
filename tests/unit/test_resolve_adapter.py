"""Tests for resolving a trigger's jobs into pipelines."""

from __future__ import annotations

import pytest

from lhpipe.core.errors import ResolveError
from lhpipe.resolve.adapter import load_trigger_pipelines
from lhpipe.triggers.model import TEKTON_PIPELINE_AGENT, Trigger, TriggerConfig


def _trigger(spec: dict) -> Trigger:
    return Trigger(path="triggers.yaml", config=TriggerConfig.from_dict({"spec": spec}))


class TestLoadTriggerPipelines:
    def test_presubmits_before_postsubmits_in_file_order(self, tmp_path, make_resolver):
        trigger = _trigger({
            "postsubmits": [{"name": "release", "source": "release.yaml"}],
            "presubmits": [
                {"name": "pr", "source": "pr.yaml"},
                {"name": "lint", "source": "lint.yaml"},
            ],
        })
        load_trigger_pipelines(make_resolver(), trigger, tmp_path)
        assert trigger.names == ["presubmit/pr", "presubmit/lint", "postsubmit/release"]
        assert set(trigger.pipelines) == set(trigger.names)

    def test_empty_source_not_resolved(self, tmp_path, make_resolver):
        resolver = make_resolver()
        trigger = _trigger({
            "presubmits": [{"name": "inline"}, {"name": "pr", "source": "pr.yaml"}],
        })
        load_trigger_pipelines(resolver, trigger, tmp_path)
        assert resolver.calls == [tmp_path / "pr.yaml"]
        assert trigger.names == ["presubmit/pr"]
        assert "presubmit/inline" not in trigger.pipelines

    def test_documents_kept_per_name(self, tmp_path, make_resolver):
        resolver = make_resolver({"pr.yaml": {"kind": "PipelineRun", "metadata": {"name": "x"}}})
        trigger = _trigger({"presubmits": [{"name": "pr", "source": "pr.yaml"}]})
        load_trigger_pipelines(resolver, trigger, tmp_path)
        assert trigger.pipelines["presubmit/pr"]["metadata"]["name"] == "x"

    def test_inline_spec_defaults_agent(self, tmp_path, make_resolver):
        trigger = _trigger({
            "presubmits": [
                {"name": "inline", "pipeline_run_spec": {"pipelineRef": {"name": "p"}}},
                {"name": "jenkins", "agent": "jenkins", "pipeline_run_spec": {}},
                {"name": "plain"},
            ],
            "postsubmits": [{"name": "rel", "pipeline_run_spec": {}}],
        })
        load_trigger_pipelines(make_resolver(), trigger, tmp_path)
        agents = {j.name: j.agent for j in trigger.config.presubmits + trigger.config.postsubmits}
        assert agents == {
            "inline": TEKTON_PIPELINE_AGENT,
            "jenkins": "jenkins",
            "plain": "",
            "rel": TEKTON_PIPELINE_AGENT,
        }
        assert trigger.names == []

    def test_failure_names_path(self, tmp_path, make_resolver):
        resolver = make_resolver(fail={"bad.yaml"})
        trigger = _trigger({
            "presubmits": [{"name": "ok", "source": "ok.yaml"}, {"name": "bad", "source": "bad.yaml"}],
        })
        with pytest.raises(ResolveError, match=r"failed to load .*bad\.yaml"):
            load_trigger_pipelines(resolver, trigger, tmp_path)

    def test_none_document_is_error(self, tmp_path):
        class NoneResolver:
            def resolve(self, path):
                return None

        trigger = _trigger({"presubmits": [{"name": "pr", "source": "pr.yaml"}]})
        with pytest.raises(ResolveError, match="no pipeline"):
            load_trigger_pipelines(NoneResolver(), trigger, tmp_path)
