# backend/hostly/domain/models/sync_result.py
"""
Feed 파싱 결과 / 동기화 결과 값 타입

FeedParser 는 예외 대신 FeedSuccess | FeedFailure 를 돌려준다.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from hostly.domain.models.reservation import Reservation


@dataclass(frozen=True)
class FeedSuccess:
    reservations: tuple[Reservation, ...]


@dataclass(frozen=True)
class FeedFailure:
    cause: str


FeedResult = Union[FeedSuccess, FeedFailure]


@dataclass(frozen=True)
class SyncOutcome:
    """property 1건에 대한 동기화 결과 (로그/응답용)"""
    property_id: str
    name: str
    success: bool
    reservation_count: int
    last_synced: Optional[datetime]
    error: Optional[str] = None
