# backend/hostly/domain/models/calendar_event.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

# icalendar 의 DTSTART/DTEND 값: DATE 는 date, DATE-TIME 은 datetime
Instant = Union[date, datetime]


@dataclass(frozen=True)
class RawCalendarEvent:
    """
    iCal 컴포넌트 하나를 분류기 입력용으로 평탄화한 값

    - component_type: "VEVENT", "VTODO", "VJOURNAL" ...
    - summary / description: 없으면 빈 문자열
    - start / end: 없으면 None
    - uid: iCal UID (없으면 None)
    """
    component_type: str
    summary: str = ""
    description: str = ""
    start: Optional[Instant] = None
    end: Optional[Instant] = None
    uid: Optional[str] = None
