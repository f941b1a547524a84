from __future__ import annotations

from contextvars import ContextVar


current_stage: ContextVar[str] = ContextVar('current_stage', default='bootstrap')
