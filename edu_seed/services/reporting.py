from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field


logger = logging.getLogger(__name__)


@dataclass
class StageSummary:
    name: str
    created: int
    skipped: int


@dataclass
class CreationReport:
    created: Counter = field(default_factory=Counter)
    skipped: Counter = field(default_factory=Counter)
    updated: Counter = field(default_factory=Counter)
    stages: list[StageSummary] = field(default_factory=list)
    facts: dict[str, str] = field(default_factory=dict)

    def record_created(self, kind: str, count: int = 1) -> None:
        self.created[kind] += count

    def record_updated(self, kind: str, count: int = 1) -> None:
        self.updated[kind] += count

    def record_skipped(self, kind: str, count: int = 1) -> None:
        self.skipped[kind] += count

    def totals(self) -> tuple[int, int]:
        return sum(self.created.values()), sum(self.skipped.values())

    def close_stage(self, name: str, before: tuple[int, int]) -> StageSummary:
        created, skipped = self.totals()
        summary = StageSummary(name=name, created=created - before[0], skipped=skipped - before[1])
        self.stages.append(summary)
        return summary


def render_manifest(report: CreationReport, *, title: str = 'Seeding Summary') -> str:
    lines = ['', title, '-' * len(title)]
    for key, value in report.facts.items():
        lines.append(f'{key}: {value}')
    if report.facts:
        lines.append('')

    if report.created:
        width = max(len(kind) for kind in report.created)
        for kind in sorted(report.created):
            lines.append(f'{kind:<{width}}  {report.created[kind]:>7,}')
    else:
        lines.append('No records created.')

    if report.updated:
        lines.append('')
        lines.append('Updated: ' + ', '.join(f'{kind}={count}' for kind, count in sorted(report.updated.items())))
    if report.skipped:
        lines.append('')
        lines.append('Skipped: ' + ', '.join(f'{kind}={count}' for kind, count in sorted(report.skipped.items())))

    total_created, _ = report.totals()
    lines.append('')
    lines.append(f'Total records created: {total_created:,}')
    return '\n'.join(lines)
