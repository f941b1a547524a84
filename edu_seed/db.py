import logging
import time
from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from edu_seed.config import settings
from edu_seed.run_context import current_stage


Base = declarative_base()

_slow_logger = logging.getLogger('edu_seed.db.slow_query')


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    context._query_start_time = time.perf_counter()


def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    start = getattr(context, '_query_start_time', None)
    if start is None:
        return
    duration_ms = (time.perf_counter() - start) * 1000.0
    if duration_ms >= settings.db_slow_query_ms:
        sql_text = (statement or '').replace('\n', ' ').strip()
        _slow_logger.warning(
            'slow_query duration_ms=%.2f stage=%s sql=%s',
            duration_ms,
            current_stage.get(),
            sql_text,
        )


def build_engine(database_url: str | None = None) -> Engine:
    url = database_url or settings.database_url
    connect_args = {'check_same_thread': False} if url.startswith('sqlite') else {}
    engine = create_engine(url, connect_args=connect_args)
    event.listen(engine, 'before_cursor_execute', _before_cursor_execute)
    event.listen(engine, 'after_cursor_execute', _after_cursor_execute)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def ensure_schema(engine: Engine) -> None:
    # Importing models registers every table on Base.metadata.
    import edu_seed.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


@contextmanager
def session_scope(session_factory: sessionmaker):
    db: Session = session_factory()
    try:
        yield db
    finally:
        db.close()
