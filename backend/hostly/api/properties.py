# backend/hostly/api/properties.py
"""
Properties API

숙소 등록 / 조회 / 삭제 / 단건 동기화
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from hostly.api.deps import get_store, get_sync_service
from hostly.api.schemas import (
    MessageResponse,
    PropertyDetailDTO,
    PropertyListResponse,
    PropertySyncResponse,
    RegisterPropertyRequest,
    SyncStatusDTO,
)
from hostly.domain.models import SyncOutcome
from hostly.repositories.property_store import PropertyStore
from hostly.services.ical_sync_service import IcalSyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/properties", tags=["Properties"])

FEED_FAILURE_MESSAGE = "Failed to fetch or parse iCal URL. Please check the URL and try again."


# --- 헬퍼 ---


def _sync_response(outcome: SyncOutcome):
    if not outcome.success:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": FEED_FAILURE_MESSAGE, "cause": outcome.error},
        )
    return PropertySyncResponse.from_outcome(outcome)


# --- API Endpoints ---


@router.post("", response_model=PropertySyncResponse)
async def register_property(
    data: RegisterPropertyRequest,
    store: PropertyStore = Depends(get_store),
    sync_service: IcalSyncService = Depends(get_sync_service),
):
    """
    숙소 등록 (또는 URL/이름 갱신) 후 바로 동기화

    - 400: propertyId / icalUrl 누락, https 아님
    - 500: iCal fetch/파싱 실패 (숙소는 등록된 상태로 남고 기존 예약은 유지)
    """
    entry = store.register(data.property_id, data.ical_url, name=data.name)
    outcome = await sync_service.sync_property(entry.property_id)
    return _sync_response(outcome)


@router.get("", response_model=PropertyListResponse)
async def list_properties(store: PropertyStore = Depends(get_store)) -> PropertyListResponse:
    return PropertyListResponse(
        properties=[SyncStatusDTO.from_entry(entry) for entry in store.list()],
    )


@router.get("/{property_id}", response_model=PropertyDetailDTO)
async def get_property(
    property_id: str,
    store: PropertyStore = Depends(get_store),
) -> PropertyDetailDTO:
    return PropertyDetailDTO.from_entry(store.get(property_id))


@router.post("/{property_id}/sync", response_model=PropertySyncResponse)
async def sync_property(
    property_id: str,
    sync_service: IcalSyncService = Depends(get_sync_service),
):
    """단건 수동 동기화. 실패해도 이전 예약/last_synced 는 그대로."""
    outcome = await sync_service.sync_property(property_id)
    return _sync_response(outcome)


@router.delete("/{property_id}", response_model=MessageResponse)
async def remove_property(
    property_id: str,
    store: PropertyStore = Depends(get_store),
) -> MessageResponse:
    store.remove(property_id)
    return MessageResponse(success=True, message=f"Property {property_id} removed")
