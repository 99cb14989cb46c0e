# backend/hostly/api/reservations.py
from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostly.api.deps import get_store
from hostly.api.schemas import ReservationDTO, ReservationListResponse, SyncStatusDTO
from hostly.repositories.property_store import PropertyStore

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    property_id: Optional[str] = Query(default=None, alias="propertyId", description="숙소 ID 필터"),
    store: PropertyStore = Depends(get_store),
) -> ReservationListResponse:
    """
    캐시된 예약 목록 조회

    - reservations: property_id 필터 적용 (없으면 전체)
    - syncStatus: 필터와 무관하게 모든 숙소
    """
    entries = store.list()

    reservations = [
        ReservationDTO.from_domain(reservation)
        for entry in entries
        if property_id is None or entry.property_id == property_id
        for reservation in entry.reservations
    ]

    return ReservationListResponse(
        reservations=reservations,
        sync_status=[SyncStatusDTO.from_entry(entry) for entry in entries],
        total_properties=len(entries),
    )
