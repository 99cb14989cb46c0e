# backend/hostly/domain/models/property.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from hostly.domain.models.reservation import Reservation


@dataclass(frozen=True)
class PropertyEntry:
    """
    PropertyStore 에 보관되는 숙소 1건의 스냅샷

    불변 객체라서 reservations 와 last_synced 는 항상 같이 교체된다.
    last_synced 는 마지막 "성공한" 동기화 시각 (한 번도 성공 못했으면 None).
    """
    property_id: str
    name: str
    ical_url: str
    reservations: tuple[Reservation, ...] = ()
    last_synced: Optional[datetime] = None

    @property
    def reservation_count(self) -> int:
        return len(self.reservations)
