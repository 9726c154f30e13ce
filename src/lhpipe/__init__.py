"""lhpipe - view the effective Tekton pipelines behind lighthouse triggers.

Usage:
    from lhpipe import EffectiveCommand, EffectiveOptions

    options = EffectiveOptions(trigger_name=".lighthouse/jenkins-x/triggers.yaml",
                               pipeline_name="presubmit/pr")
    EffectiveCommand(options).run()
"""

from lhpipe.core.config import EffectiveOptions
from lhpipe.core.errors import LhpipeError
from lhpipe.effective import EffectiveCommand, Selection
from lhpipe.resolve.adapter import PipelineResolver
from lhpipe.resolve.uses import ResolverOptions, UsesResolver
from lhpipe.triggers.model import JobSpec, Trigger, TriggerConfig

__all__ = [
    "EffectiveCommand",
    "EffectiveOptions",
    "JobSpec",
    "LhpipeError",
    "PipelineResolver",
    "ResolverOptions",
    "Selection",
    "Trigger",
    "TriggerConfig",
    "UsesResolver",
]

__version__ = "0.1.0"
