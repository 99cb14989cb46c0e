# backend/hostly/services/classifiers/rule_based.py
from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from hostly.domain.feed_rules import FeedDialect, get_airbnb_dialect
from hostly.domain.models import Instant, RawCalendarEvent, Reservation
from .base import EventClassifier

logger = logging.getLogger(__name__)


def to_calendar_date(value: Instant) -> date:
    """
    DTSTART/DTEND 값을 날짜로 변환.
    timezone 이 있는 datetime 은 UTC 로 바꾼 뒤 날짜만 취한다.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def to_utc_instant(value: Instant) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def format_instant(value: Instant) -> str:
    """2026-02-01T00:00:00.000Z 형식"""
    instant = to_utc_instant(value)
    return instant.strftime("%Y-%m-%dT%H:%M:%S.") + f"{instant.microsecond // 1000:03d}Z"


class RuleBasedEventClassifier(EventClassifier):
    """
    FeedDialect 룰 기반 분류기.

    순수 함수: 네트워크/스토어 접근 없음.
    1) component_type 이 대상(VEVENT)이 아니면 skip
    2) SUMMARY 가 blackout 룰에 걸리면 skip
    3) 시작/종료가 없으면 skip
    4) 숙박일수 < 1 이면 skip
    """

    def __init__(self, dialect: Optional[FeedDialect] = None):
        self.dialect = dialect or get_airbnb_dialect()

    def classify(self, event: RawCalendarEvent, property_id: str) -> Optional[Reservation]:
        if event.component_type.upper() not in self.dialect.eligible_component_types:
            return None

        summary = event.summary or ""
        if self.dialect.is_blackout(summary):
            return None

        if event.start is None or event.end is None:
            logger.debug(f"CLASSIFIER: missing start/end, skipped: {summary!r}")
            return None

        check_in = to_calendar_date(event.start)
        check_out = to_calendar_date(event.end)
        nights = (check_out - check_in).days
        if nights < 1:
            logger.debug(
                f"CLASSIFIER: non-positive stay ({check_in} ~ {check_out}), skipped: {summary!r}"
            )
            return None

        guest_name = self.dialect.extract_guest_name(summary, event.description or "")
        reservation_id = event.uid or f"{property_id}-{format_instant(event.start)}"

        return Reservation(
            id=reservation_id,
            property_id=property_id,
            guest_name=guest_name,
            check_in=check_in,
            check_out=check_out,
            nights=nights,
            total=self.dialect.total_amount,
            source=self.dialect.source,
            summary=summary,
        )
