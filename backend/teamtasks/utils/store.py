"""저장소 어댑터 공용 헬퍼입니다."""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from teamtasks.exceptions import StoreError

logger = logging.getLogger(__name__)


def error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


@contextmanager
def store_guard(db: Session, action: str):
    """SQLAlchemy 오류를 롤백 후 StoreError 로 바꿔 올린다."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        message = error_message(exc)
        logger.warning("[store] %s failed: %s", action, message)
        raise StoreError(message) from exc
