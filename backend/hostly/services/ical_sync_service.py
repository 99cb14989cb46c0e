# backend/hostly/services/ical_sync_service.py
"""
iCal Sync Service

- sync_property: property 1건 재파싱 후 PropertyStore 에 반영
- sync_all: 등록된 모든 property 를 순서대로 동기화 (한 건 실패가 다른 건에 영향 없음)

자동 재시도 없음. 실패한 property 는 다음 스케줄/수동 동기화에서 다시 시도된다.
스케줄 동기화와 수동 동기화가 겹치면 property 단위 last-write-wins.
fetch 도중 iCal URL 이 바뀌면 이전 URL 결과는 버린다.
"""
from __future__ import annotations

import logging
import time
from typing import List

from hostly.domain.models import SyncOutcome
from hostly.repositories.property_store import PropertyStore
from hostly.services.feed_parser import FeedParser

logger = logging.getLogger(__name__)


class IcalSyncService:
    def __init__(self, store: PropertyStore, parser: FeedParser):
        self.store = store
        self.parser = parser

    async def sync_property(self, property_id: str) -> SyncOutcome:
        """
        Raises:
            PropertyNotFoundError: 등록되지 않은 property_id
        """
        entry = self.store.get(property_id)
        result = await self.parser.parse(entry.ical_url, property_id)
        outcome = self.store.apply_sync(property_id, result, ical_url=entry.ical_url)
        self._log_outcome(entry.name, outcome)
        return outcome

    async def sync_all(self) -> List[SyncOutcome]:
        entries = self.store.list()
        start_time = time.monotonic()
        logger.info(f"ICAL_SYNC: syncing all properties ({len(entries)})")

        outcomes: List[SyncOutcome] = []
        for entry in entries:
            result = await self.parser.parse(entry.ical_url, entry.property_id)
            outcome = self.store.apply_sync(entry.property_id, result, ical_url=entry.ical_url)
            self._log_outcome(entry.name, outcome)
            outcomes.append(outcome)

        succeeded = sum(1 for o in outcomes if o.success)
        duration = time.monotonic() - start_time
        logger.info(
            f"ICAL_SYNC: done in {duration:.1f}s, "
            f"succeeded={succeeded} failed={len(outcomes) - succeeded}"
        )
        return outcomes

    def _log_outcome(self, name: str, outcome: SyncOutcome) -> None:
        if outcome.success:
            logger.info(f"ICAL_SYNC:   ✓ {name}: {outcome.reservation_count} reservations")
        else:
            logger.warning(f"ICAL_SYNC:   ✗ {name}: sync failed ({outcome.error})")
