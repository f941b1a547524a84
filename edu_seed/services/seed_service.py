from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from edu_seed.core.sampling import Sampler
from edu_seed.core.time_provider import TimeProvider, default_time_provider
from edu_seed.schemas import SeedOptions
from edu_seed.services.context_loader import load_tenant_context
from edu_seed.services.reporting import CreationReport, render_manifest
from edu_seed.services.scheduler import PipelineStage, SeedContext, run_pipeline, select_stages
from edu_seed.store.base import Store


logger = logging.getLogger(__name__)


class RunState(str, Enum):
    INITIALIZING = 'INITIALIZING'
    LOADING_CONTEXT = 'LOADING_CONTEXT'
    SYNTHESIZING = 'SYNTHESIZING'
    REPORTING = 'REPORTING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'


TERMINAL_STATES = frozenset({RunState.COMPLETED, RunState.FAILED})


@dataclass
class SeedResult:
    seed: int
    report: CreationReport
    manifest: str
    stages: list[str] = field(default_factory=list)


class SeedRun:
    """One seeding run against one school.

    The run walks INITIALIZING -> LOADING_CONTEXT -> SYNTHESIZING ->
    REPORTING -> COMPLETED. Any error moves it to FAILED and is re-raised;
    there is no retry and stages committed before the failure stay committed.
    """

    def __init__(
        self,
        store: Store,
        options: SeedOptions,
        *,
        time_provider: TimeProvider | None = None,
        cancel_event: threading.Event | None = None,
        stages: Sequence[PipelineStage] | None = None,
    ):
        if stages is None:
            from edu_seed.pipeline import STAGES

            stages = STAGES
        self.store = store
        self.options = options
        self.time_provider = time_provider or default_time_provider
        self.cancel_event = cancel_event or threading.Event()
        self.stages = list(stages)
        self.state = RunState.INITIALIZING
        self.history = [RunState.INITIALIZING]
        self.context: SeedContext | None = None

    def _transition(self, state: RunState) -> None:
        if self.state in TERMINAL_STATES:
            raise RuntimeError(f'Run already finished in state {self.state.value}')
        logger.info('run_state from=%s to=%s', self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def execute(self) -> SeedResult:
        options = self.options
        if options.dry_run and self.store.commit_enabled:
            # A dry run must never make a stage durable.
            logger.info('dry_run_commit_disabled store=%s', type(self.store).__name__)
            self.store.commit_enabled = False
        try:
            selected = select_stages(self.stages, append=options.append, only=options.stages)

            self._transition(RunState.LOADING_CONTEXT)
            tenant = load_tenant_context(self.store, options.tenant_id)
            sampler = Sampler(options.seed)
            ctx = SeedContext(
                store=self.store,
                tenant=tenant,
                sampler=sampler,
                options=options,
                time_provider=self.time_provider,
                cancel_event=self.cancel_event,
            )
            self.context = ctx
            logger.info(
                'run_started school_id=%s seed=%s mode=%s dry_run=%s stages=%s',
                tenant.school.id,
                sampler.seed,
                options.mode,
                options.dry_run,
                len(selected),
            )

            self._transition(RunState.SYNTHESIZING)
            run_pipeline(ctx, selected)

            self._transition(RunState.REPORTING)
            manifest = self._report(ctx)
            if options.dry_run:
                self.store.discard()
            self._transition(RunState.COMPLETED)
        except Exception as exc:
            logger.error('run_failed state=%s error=%s', self.state.value, exc)
            if options.dry_run:
                self.store.discard()
            self._transition(RunState.FAILED)
            raise

        return SeedResult(seed=ctx.sampler.seed, report=ctx.report, manifest=manifest, stages=list(ctx.completed_stages))

    def _report(self, ctx: SeedContext) -> str:
        tenant = ctx.tenant
        term = tenant.active_term
        facts = {
            'School': f'{tenant.school.name} (id={tenant.school.id})',
            'Seed': str(ctx.sampler.seed),
            'Mode': self.options.mode,
            'Dry run': 'yes (rolled back)' if self.options.dry_run else 'no',
            'Active term': term.name if term is not None else 'none',
            'Stages run': str(len(ctx.completed_stages)),
        }
        # Stages may have recorded their own facts; the run facts go first.
        facts.update(ctx.report.facts)
        ctx.report.facts = facts
        return render_manifest(ctx.report)


def run_seed(
    store: Store,
    options: SeedOptions,
    *,
    time_provider: TimeProvider | None = None,
    cancel_event: threading.Event | None = None,
    stages: Sequence[PipelineStage] | None = None,
) -> SeedResult:
    return SeedRun(store, options, time_provider=time_provider, cancel_event=cancel_event, stages=stages).execute()
