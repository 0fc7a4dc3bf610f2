# app/utils/dates.py

from datetime import date, datetime, timezone
from typing import Any, Optional


def to_calendar_day(value: Any) -> Any:
    """
    날짜/일시 값을 달력 일자(date)로 변환합니다.

    - datetime 객체와 일시 문자열(예: "2024-05-01T09:30:00Z")은 시각을 버립니다.
    - date 객체와 "YYYY-MM-DD" 문자열은 그대로 둡니다. (Pydantic이 검증)
    - 해석할 수 없는 일시 문자열은 ValueError를 발생시킵니다.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value.strip()) > 10:
        return datetime.fromisoformat(value.strip()).date()
    return value


def parse_calendar_day(value: str) -> date:
    """문자열을 달력 일자로 해석합니다. 형식이 잘못되면 ValueError를 발생시킵니다."""
    day = to_calendar_day(value)
    if isinstance(day, str):
        day = date.fromisoformat(day.strip())
    return day


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """시간대 정보가 없는 일시는 UTC로 간주합니다."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
