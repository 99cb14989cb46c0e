# backend/hostly/api/schemas.py
"""
API DTOs

JSON 필드는 camelCase (기존 프론트엔드 호환), 파이썬 필드는 snake_case.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from hostly.domain.models import PropertyEntry, Reservation, SyncOutcome


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )


# ========== Requests ==========

class RegisterPropertyRequest(CamelModel):
    """숙소 등록 요청 (필수값 검증은 PropertyStore 에서 400 으로 처리)"""
    property_id: Optional[str] = Field(None, description="외부에서 지정하는 숙소 ID")
    name: Optional[str] = Field(None, description="표시 이름 (없으면 'Property {id}')")
    ical_url: Optional[str] = Field(None, description="https:// iCal URL")


# ========== Responses ==========

class HealthResponse(CamelModel):
    status: str
    message: str
    version: str


class ReservationDTO(CamelModel):
    id: str
    property_id: str
    guest_name: str
    check_in: date
    check_out: date
    nights: int
    total: int
    source: str
    summary: str

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationDTO":
        return cls(
            id=reservation.id,
            property_id=reservation.property_id,
            guest_name=reservation.guest_name,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            nights=reservation.nights,
            total=reservation.total,
            source=reservation.source,
            summary=reservation.summary,
        )


class SyncStatusDTO(CamelModel):
    property_id: str
    name: str
    last_synced: Optional[datetime] = None
    reservation_count: int

    @classmethod
    def from_entry(cls, entry: PropertyEntry) -> "SyncStatusDTO":
        return cls(
            property_id=entry.property_id,
            name=entry.name,
            last_synced=entry.last_synced,
            reservation_count=entry.reservation_count,
        )


class PropertyDetailDTO(SyncStatusDTO):
    ical_url: str

    @classmethod
    def from_entry(cls, entry: PropertyEntry) -> "PropertyDetailDTO":
        return cls(
            property_id=entry.property_id,
            name=entry.name,
            last_synced=entry.last_synced,
            reservation_count=entry.reservation_count,
            ical_url=entry.ical_url,
        )


class PropertySyncResponse(CamelModel):
    """등록 / 단건 동기화 성공 응답"""
    success: bool
    property_id: str
    name: str
    reservation_count: int
    last_synced: Optional[datetime] = None

    @classmethod
    def from_outcome(cls, outcome: SyncOutcome) -> "PropertySyncResponse":
        return cls(
            success=outcome.success,
            property_id=outcome.property_id,
            name=outcome.name,
            reservation_count=outcome.reservation_count,
            last_synced=outcome.last_synced,
        )


class ReservationListResponse(CamelModel):
    reservations: List[ReservationDTO]
    sync_status: List[SyncStatusDTO]
    total_properties: int


class SyncAllResponse(CamelModel):
    success: bool
    sync_status: List[SyncStatusDTO]


class PropertyListResponse(CamelModel):
    properties: List[SyncStatusDTO]


class MessageResponse(CamelModel):
    success: bool
    message: str


class SchedulerStatusResponse(CamelModel):
    running: bool
    next_run: Optional[str] = None
    cron_minute: int
