# backend/hostly/domain/models/__init__.py

from .calendar_event import RawCalendarEvent, Instant
from .reservation import Reservation
from .property import PropertyEntry
from .sync_result import FeedSuccess, FeedFailure, FeedResult, SyncOutcome

__all__ = [
    # iCal 입력
    "RawCalendarEvent",
    "Instant",

    # 예약 / 숙소
    "Reservation",
    "PropertyEntry",

    # 결과 타입
    "FeedSuccess",
    "FeedFailure",
    "FeedResult",
    "SyncOutcome",
]
