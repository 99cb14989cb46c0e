# backend/hostly/repositories/property_store.py
"""
Property Store

property_id -> PropertyEntry 인메모리 저장소 (프로세스 수명 동안만 유지)
- register: 등록/덮어쓰기 (기존 예약/last_synced 는 보존)
- apply_sync: 성공이면 reservations + last_synced 를 한 번에 교체, 실패면 그대로
- remove / reset_all / list / get

PropertyEntry 가 불변이라 lock 은 dict 조작 동안만 잡는다.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import httpx

from hostly.domain.errors import PropertyNotFoundError, PropertyValidationError
from hostly.domain.models import FeedFailure, FeedResult, PropertyEntry, SyncOutcome

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_ical_url(ical_url: str) -> None:
    """https:// 이고 호스트가 있는 URL 만 허용"""
    try:
        url = httpx.URL(ical_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise PropertyValidationError(f"icalUrl is not a valid URL: {e}") from None

    if url.scheme != "https" or not url.host:
        raise PropertyValidationError("icalUrl must be a valid https:// URL")


class PropertyStore:
    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._entries: Dict[str, PropertyEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock

    # --- 조회 ---

    def get(self, property_id: str) -> PropertyEntry:
        with self._lock:
            entry = self._entries.get(property_id)
        if entry is None:
            raise PropertyNotFoundError(property_id)
        return entry

    def list(self) -> List[PropertyEntry]:
        """등록 순서대로 스냅샷"""
        with self._lock:
            return list(self._entries.values())

    # --- 생성/수정/삭제 ---

    def register(
        self,
        property_id: Optional[str],
        ical_url: Optional[str],
        name: Optional[str] = None,
    ) -> PropertyEntry:
        """
        숙소 등록. 이미 있으면 name/url 만 덮어쓰고 예약/last_synced 는 유지.

        Raises:
            PropertyValidationError: property_id / ical_url 누락, https 아님
        """
        property_id = (property_id or "").strip()
        ical_url = (ical_url or "").strip()
        if not property_id or not ical_url:
            raise PropertyValidationError("propertyId and icalUrl are required")
        validate_ical_url(ical_url)

        display_name = (name or "").strip() or f"Property {property_id}"

        with self._lock:
            existing = self._entries.get(property_id)
            if existing is None:
                entry = PropertyEntry(
                    property_id=property_id,
                    name=display_name,
                    ical_url=ical_url,
                )
            else:
                entry = replace(existing, name=display_name, ical_url=ical_url)
            self._entries[property_id] = entry

        logger.info(
            f"PROPERTY_STORE: {'updated' if existing else 'registered'} "
            f"property={property_id} name={display_name!r}"
        )
        return entry

    def apply_sync(
        self,
        property_id: str,
        result: FeedResult,
        ical_url: Optional[str] = None,
    ) -> SyncOutcome:
        """
        파싱 결과 반영.

        - FeedSuccess: reservations 와 last_synced 를 함께 교체
        - FeedFailure: 아무것도 바꾸지 않고 실패 outcome 반환
        - 동기화 도중 삭제된 property 는 되살리지 않는다
        - ical_url 이 주어졌는데 현재 등록된 URL 과 다르면 (fetch 도중 재등록) 결과를 버린다
        """
        with self._lock:
            current = self._entries.get(property_id)
            if current is None:
                cause = "property removed during sync"
                updated = None
            elif ical_url is not None and current.ical_url != ical_url:
                cause = "property changed during sync"
                updated = current
            elif isinstance(result, FeedFailure):
                cause = result.cause
                updated = current
            else:
                cause = None
                updated = replace(
                    current,
                    reservations=result.reservations,
                    last_synced=self._clock(),
                )
                self._entries[property_id] = updated

        if updated is None:
            return SyncOutcome(
                property_id=property_id,
                name="",
                success=False,
                reservation_count=0,
                last_synced=None,
                error=cause,
            )

        return SyncOutcome(
            property_id=property_id,
            name=updated.name,
            success=cause is None,
            reservation_count=updated.reservation_count,
            last_synced=updated.last_synced,
            error=cause,
        )

    def remove(self, property_id: str) -> PropertyEntry:
        with self._lock:
            entry = self._entries.pop(property_id, None)
        if entry is None:
            raise PropertyNotFoundError(property_id)
        logger.info(f"PROPERTY_STORE: removed property={property_id}")
        return entry

    def reset_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries = {}
        logger.info(f"PROPERTY_STORE: reset, cleared {count} properties")
        return count
