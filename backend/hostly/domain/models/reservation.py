# backend/hostly/domain/models/reservation.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Reservation:
    """
    iCal 에서 추출한 확정 예약 1건

    - id: VEVENT UID, 없으면 "{property_id}-{체크인 시각 ISO}"
    - check_in / check_out: 날짜만 (check_in < check_out)
    - nights: (check_out - check_in).days, 항상 1 이상
    - total: iCal 에는 가격이 없으므로 항상 0
    - summary: 원본 SUMMARY (디버깅용)
    """
    id: str
    property_id: str
    guest_name: str
    check_in: date
    check_out: date
    nights: int
    total: int
    source: str
    summary: str
