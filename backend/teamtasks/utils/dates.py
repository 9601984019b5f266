"""날짜 입력을 달력 기준 YYYY-MM-DD 문자열로 정규화하는 헬퍼입니다."""

import re
from datetime import date, datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

from dateutil import parser as date_parser
from fastapi import HTTPException

from teamtasks.config import settings

YMD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# 일/월이 빠진 입력은 1일, 1월로 채운다. 오늘 날짜에 의존하지 않는다.
PARTIAL_DATE_DEFAULT = datetime(2000, 1, 1)


def _local_tz() -> ZoneInfo:
    return ZoneInfo(settings.LOCAL_TIMEZONE)


def _to_local_day(value: datetime) -> date:
    # aware 시각은 현지 벽시계 날짜로 옮긴 뒤 자른다. naive 값은 이미 현지 시각이다.
    if value.tzinfo is not None:
        value = value.astimezone(_local_tz())
    return value.date()


def to_ymd(value: Any) -> Optional[str]:
    """임의의 날짜 입력을 YYYY-MM-DD 로 바꾼다. 해석할 수 없으면 None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _to_local_day(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        # 브라우저 Date 와 같이 epoch 밀리초로 해석
        try:
            return datetime.fromtimestamp(value / 1000, tz=_local_tz()).date().isoformat()
        except (OverflowError, OSError, ValueError):
            return None

    text = str(value).strip()
    if not text:
        return None
    if YMD_PATTERN.match(text):
        return text
    try:
        parsed = date_parser.parse(text, default=PARTIAL_DATE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return _to_local_day(parsed).isoformat()


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_ymd(value: Any, field: str) -> Optional[date]:
    """요청 값 검증용. 비어 있으면 None, 해석 불가한 값은 400."""
    if is_blank(value):
        return None
    normalized = to_ymd(value)
    if normalized is None:
        raise HTTPException(status_code=400, detail=f"Invalid '{field}' date")
    try:
        return date.fromisoformat(normalized)
    except ValueError:
        # 2025-02-30 처럼 형식만 맞는 값
        raise HTTPException(status_code=400, detail=f"Invalid '{field}' date")
