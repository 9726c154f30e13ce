"""The effective command — load triggers, pick one pipeline, present it."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lhpipe.core.config import EffectiveOptions
from lhpipe.resolve.adapter import PipelineResolver
from lhpipe.resolve.uses import ResolverOptions
from lhpipe.triggers.loader import TriggerLoader
from lhpipe.triggers.model import Trigger
from lhpipe.view.editor import CommandRunner, run_command
from lhpipe.view.presenter import Presenter
from lhpipe.view.select import BatchInput, ClickInput, Input, pick_name

logger = logging.getLogger(__name__)


@dataclass
class Selection:
    """The (trigger, job, document) triple chosen for display."""

    trigger: Trigger
    name: str
    document: dict = field(repr=False)


class EffectiveCommand:
    """One run of ``lhpipe effective``.

    Collaborators default to the real ones; tests pass fakes.
    """

    def __init__(
        self,
        options: EffectiveOptions,
        resolver: PipelineResolver | None = None,
        input: Input | None = None,
        runner: CommandRunner = run_command,
        presenter: Presenter | None = None,
    ):
        self.options = options
        if resolver is None:
            resolver = ResolverOptions(dir=options.root_dir, cache_dir=options.cache_dir).create_resolver()
        self.resolver = resolver
        if input is None:
            input = BatchInput() if options.batch_mode else ClickInput()
        self.input = input
        self.presenter = presenter or Presenter(options, runner=runner)
        self.triggers: list[Trigger] = []

    def run(self) -> Selection:
        loader = TriggerLoader(self.resolver)
        self.triggers = loader.load(self.options.root_dir, self.options.recursive)
        logger.debug("found %d trigger file(s)", len(self.triggers))

        selection = self.select()
        self.presenter.display(selection.trigger, selection.name, selection.document)
        return selection

    def select(self) -> Selection:
        by_path = {t.path: t for t in self.triggers}
        path = pick_name(
            self.options.trigger_name,
            list(by_path),
            option="trigger",
            prompt="pick the trigger config: ",
            help="select the set of triggers to process",
            input=self.input,
            what="trigger file",
        )
        trigger = by_path[path]

        name = pick_name(
            self.options.pipeline_name,
            trigger.names,
            option="pipeline",
            prompt="pick the pipeline: ",
            help="select the pipeline to view",
            input=self.input,
            what="pipeline",
        )
        return Selection(trigger=trigger, name=name, document=trigger.pipelines[name])
