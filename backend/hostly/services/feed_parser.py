# backend/hostly/services/feed_parser.py
"""
Feed Parser

IcalFetcher 로 iCal 을 받아 컴포넌트별로 분류기를 돌린다.
- 결과는 FeedSuccess(reservations) 또는 FeedFailure(cause)
- 어떤 실패도 예외로 밖에 나가지 않는다
- 이벤트 0건은 실패가 아니라 빈 리스트
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterator, Optional

from icalendar import Calendar

from hostly.domain.errors import FeedFetchError
from hostly.domain.models import (
    FeedFailure,
    FeedResult,
    FeedSuccess,
    RawCalendarEvent,
    Reservation,
)
from hostly.services.classifiers import EventClassifier, RuleBasedEventClassifier
from hostly.services.ical_fetcher import IcalFetcher

logger = logging.getLogger(__name__)


def _first_text(component, name: str) -> str:
    """같은 속성이 여러 번 나오면 icalendar 는 list 를 돌려준다. 첫 값만 사용"""
    value = component.get(name, "")
    if isinstance(value, list):
        value = value[0] if value else ""
    return str(value)


def to_raw_event(component) -> RawCalendarEvent:
    """icalendar 컴포넌트 -> RawCalendarEvent"""
    dtstart = component.get("DTSTART")
    dtend = component.get("DTEND")
    duration = component.get("DURATION")

    start = dtstart.dt if dtstart is not None else None
    end = dtend.dt if dtend is not None else None

    # DTEND 가 없으면 DURATION 으로 계산
    if end is None and start is not None and duration is not None:
        delta = duration.dt
        if isinstance(delta, timedelta):
            end = start + delta

    uid = _first_text(component, "UID").strip() or None

    return RawCalendarEvent(
        component_type=component.name or "",
        summary=_first_text(component, "SUMMARY"),
        description=_first_text(component, "DESCRIPTION"),
        start=start,
        end=end,
        uid=uid,
    )


class FeedParser:
    def __init__(
        self,
        fetcher: IcalFetcher,
        classifier: Optional[EventClassifier] = None,
    ):
        self.fetcher = fetcher
        self.classifier = classifier or RuleBasedEventClassifier()

    async def parse(self, url: str, property_id: str) -> FeedResult:
        try:
            ical_data = await self.fetcher.fetch(url)
        except FeedFetchError as e:
            logger.error(f"FEED_PARSER: fetch failed for property {property_id}: {e.cause}")
            return FeedFailure(cause=str(e))
        except Exception as e:
            logger.exception(f"FEED_PARSER: unexpected fetch error for property {property_id}")
            return FeedFailure(cause=f"Failed to fetch iCal feed: {type(e).__name__}: {e}")

        try:
            reservations = self.parse_text(ical_data, property_id)
        except ValueError as e:
            logger.error(f"FEED_PARSER: malformed iCal for property {property_id}: {e}")
            return FeedFailure(cause=f"Malformed iCal document: {e}")
        except Exception as e:
            logger.exception(f"FEED_PARSER: unexpected parse error for property {property_id}")
            return FeedFailure(cause=f"Failed to parse iCal feed: {type(e).__name__}: {e}")

        return FeedSuccess(reservations=tuple(reservations))

    def parse_text(self, ical_data: str, property_id: str) -> list[Reservation]:
        """
        iCal 텍스트 -> Reservation 리스트 (피드 순서 유지)

        Raises:
            ValueError: iCal 문서로 디코딩할 수 없을 때
        """
        if not ical_data or not ical_data.strip():
            raise ValueError("empty document")

        calendar = Calendar.from_ical(ical_data)
        if calendar.name != "VCALENDAR":
            raise ValueError(f"expected VCALENDAR, got {calendar.name}")

        reservations: list[Reservation] = []
        seen_ids: set[str] = set()

        for event in self._iter_events(calendar, property_id):
            reservation = self.classifier.classify(event, property_id)
            if reservation is None:
                continue
            if reservation.id in seen_ids:
                logger.warning(
                    f"FEED_PARSER: duplicate reservation id {reservation.id!r} "
                    f"in property {property_id}, keeping first"
                )
                continue
            seen_ids.add(reservation.id)
            reservations.append(reservation)

        return reservations

    def _iter_events(self, calendar: Calendar, property_id: str) -> Iterator[RawCalendarEvent]:
        for component in calendar.walk():
            if component is calendar:
                continue
            try:
                yield to_raw_event(component)
            except Exception as e:
                logger.warning(
                    f"FEED_PARSER: unreadable {component.name} in property {property_id}: {e}"
                )
                continue
