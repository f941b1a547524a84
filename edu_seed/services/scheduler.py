from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Iterator, Sequence

from edu_seed.core.sampling import Sampler
from edu_seed.core.time_provider import TimeProvider, default_time_provider
from edu_seed.errors import ConfigurationError, RunCancelled, ValidationError
from edu_seed.run_context import current_stage
from edu_seed.schemas import SeedOptions
from edu_seed.services.context_loader import TenantContext
from edu_seed.services.reporting import CreationReport
from edu_seed.store.base import Store


logger = logging.getLogger(__name__)


class StageKind(str, Enum):
    ENSURE = 'ensure'
    APPEND = 'append'


@dataclass
class SeedContext:
    store: Store
    tenant: TenantContext
    sampler: Sampler
    options: SeedOptions
    report: CreationReport = field(default_factory=CreationReport)
    time_provider: TimeProvider = default_time_provider
    cancel_event: threading.Event = field(default_factory=threading.Event)
    produced: dict[str, list[Any]] = field(default_factory=dict)
    completed_stages: list[str] = field(default_factory=list)

    @property
    def now(self) -> datetime:
        return self.time_provider.naive_now()

    @property
    def today(self) -> date:
        return self.now.date()

    def create(self, model, record: dict[str, Any]):
        row = self.store.repository(model).create(record)
        self.report.record_created(model.__name__)
        return row

    def update(self, model, row_id: int, patch: dict[str, Any]):
        row = self.store.repository(model).update(row_id, patch)
        self.report.record_updated(model.__name__)
        return row

    def skip(self, exc: ValidationError) -> None:
        self.report.record_skipped(exc.kind)
        logger.info('unit_skipped kind=%s reason=%s', exc.kind, exc.reason)

    @contextmanager
    def skip_invalid(self) -> Iterator[None]:
        """Wrap one unit of work; a ValidationError skips just that unit."""
        try:
            yield
        except ValidationError as exc:
            self.skip(exc)

    def produce(self, key: str, rows: list[Any]) -> None:
        self.produced.setdefault(key, []).extend(rows)

    def ran(self, stage_name: str) -> bool:
        return stage_name in self.completed_stages

    def upstream(self, stage_name: str, key: str, fallback: Callable[[], list[Any]]) -> list[Any]:
        """Parents for an append stage.

        When the producing stage ran in this run, only its output is used so
        a run never attaches children to rows it did not create. Otherwise
        ``fallback`` loads existing parents from the store.
        """
        if self.ran(stage_name):
            return list(self.produced.get(key, []))
        return fallback()


@dataclass(frozen=True)
class PipelineStage:
    name: str
    run: Callable[[SeedContext], None]
    kind: StageKind = StageKind.ENSURE
    dependencies: tuple[str, ...] = ()
    description: str = ''


def validate_pipeline(stages: Sequence[PipelineStage]) -> None:
    seen: set[str] = set()
    for stage in stages:
        if stage.name in seen:
            raise ConfigurationError(f'Duplicate stage name: {stage.name}')
        for dependency in stage.dependencies:
            if dependency not in seen:
                raise ConfigurationError(f'Stage {stage.name} depends on {dependency}, which does not run before it')
        seen.add(stage.name)


def select_stages(
    stages: Sequence[PipelineStage],
    *,
    append: bool,
    only: Sequence[str] | None = None,
) -> list[PipelineStage]:
    """Stages to execute, in registry order.

    Append stages are dropped unless ``append`` is set. ``only`` narrows the
    run to the named stages; naming an append stage without ``append`` is a
    configuration error rather than a silent no-op.
    """
    by_name = {stage.name: stage for stage in stages}
    if only:
        unknown = [name for name in only if name not in by_name]
        if unknown:
            raise ConfigurationError(f'Unknown stage(s): {", ".join(unknown)}')
        if not append:
            gated = [name for name in only if by_name[name].kind is StageKind.APPEND]
            if gated:
                raise ConfigurationError(f'Stage(s) {", ".join(gated)} only run in append mode')
    wanted = set(only) if only else None
    selected = []
    for stage in stages:
        if wanted is not None and stage.name not in wanted:
            continue
        if stage.kind is StageKind.APPEND and not append:
            continue
        selected.append(stage)
    return selected


def run_pipeline(ctx: SeedContext, stages: Sequence[PipelineStage]) -> None:
    """Run stages strictly in order with a commit between each.

    The commit is the stage boundary: nothing in the next stage starts before
    the previous stage's writes are durable. A cancel request is honoured at
    the boundary, never in the middle of a stage.
    """
    total = len(stages)
    for position, stage in enumerate(stages, start=1):
        if ctx.cancel_event.is_set():
            raise RunCancelled(f'Run cancelled before stage {stage.name}')

        token = current_stage.set(stage.name)
        try:
            logger.info('stage_started stage=%s position=%s/%s kind=%s', stage.name, position, total, stage.kind.value)
            before = ctx.report.totals()
            stage.run(ctx)
            ctx.store.commit()
        finally:
            current_stage.reset(token)

        summary = ctx.report.close_stage(stage.name, before)
        ctx.completed_stages.append(stage.name)
        logger.info(
            'stage_completed stage=%s created=%s skipped=%s total_created=%s',
            stage.name,
            summary.created,
            summary.skipped,
            ctx.report.totals()[0],
        )
