from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from pydantic import ValidationError as OptionsError
from sqlalchemy.exc import SQLAlchemyError

from edu_seed.config import settings
from edu_seed.db import build_engine, build_session_factory, ensure_schema, session_scope
from edu_seed.errors import SeedError
from edu_seed.pipeline import STAGES
from edu_seed.schemas import SeedOptions
from edu_seed.services.seed_service import run_seed
from edu_seed.store import SqlAlchemyStore


logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='edu-seed',
        description='Populate a school with realistic, internally consistent synthetic data.',
    )
    parser.add_argument('--tenant-id', type=int, default=None, help='School id to seed (default: first school found).')
    parser.add_argument('--seed', type=int, default=None, help='Random seed; a run with the same seed and data is replayable.')
    parser.add_argument('--dry-run', action='store_true', help='Run every stage, then roll all writes back.')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--append', dest='append', action='store_true', help='Also run append stages (assignments, grades, ...).')
    mode.add_argument('--ensure-only', dest='append', action='store_false', help='Only converge catalog data (default).')
    parser.set_defaults(append=False)
    parser.add_argument(
        '--stage',
        action='append',
        default=None,
        metavar='NAME',
        help='Run only this stage; repeat to select several. See --list-stages.',
    )
    parser.add_argument('--list-stages', action='store_true', help='Print the stage registry and exit.')
    parser.add_argument('--create-schema', action='store_true', help='Create missing tables before seeding.')
    parser.add_argument('--database-url', default=None, help='Override DATABASE_URL.')
    parser.add_argument('--log-level', default=None, help='Override LOG_LEVEL (DEBUG, INFO, WARNING, ...).')
    return parser


def format_stage_list() -> str:
    width = max(len(stage.name) for stage in STAGES)
    lines = []
    for position, stage in enumerate(STAGES, start=1):
        depends = ', '.join(stage.dependencies) or '-'
        lines.append(f'{position:>2}. {stage.name:<{width}}  {stage.kind.value:<6}  after: {depends}  {stage.description}')
    return '\n'.join(lines)


def _install_cancel_handler(cancel_event: threading.Event):
    def _handle(signum, frame):
        logger.warning('cancel_requested signal=%s finishing_current_stage=true', signum)
        cancel_event.set()

    try:
        return signal.signal(signal.SIGINT, _handle)
    except ValueError:
        # Only the main thread may install signal handlers.
        return None


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_stages:
        print(format_stage_list())
        return 0

    logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format=LOG_FORMAT)

    cancel_event = threading.Event()
    previous_handler = _install_cancel_handler(cancel_event)
    engine = None
    try:
        options = SeedOptions.from_settings(
            tenant_id=args.tenant_id,
            seed=args.seed,
            append=args.append,
            dry_run=args.dry_run,
            stages=args.stage,
        )
        engine = build_engine(args.database_url)
        if args.create_schema:
            ensure_schema(engine)
        with session_scope(build_session_factory(engine)) as db:
            store = SqlAlchemyStore(db, commit=not options.dry_run)
            result = run_seed(store, options, cancel_event=cancel_event)
    except (SeedError, SQLAlchemyError, OptionsError) as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 1
    finally:
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)
        if engine is not None:
            engine.dispose()

    print(result.manifest)
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
