# backend/hostly/api/sync.py
from fastapi import APIRouter, Depends

from hostly.api.deps import get_settings, get_store, get_sync_service
from hostly.api.schemas import (
    MessageResponse,
    SchedulerStatusResponse,
    SyncAllResponse,
    SyncStatusDTO,
)
from hostly.core.config import Settings
from hostly.repositories.property_store import PropertyStore
from hostly.services.ical_sync_service import IcalSyncService
from hostly.services.scheduler import JOB_ID, get_scheduler

router = APIRouter(tags=["Sync"])


@router.post("/sync", response_model=SyncAllResponse)
async def sync_all(
    store: PropertyStore = Depends(get_store),
    sync_service: IcalSyncService = Depends(get_sync_service),
) -> SyncAllResponse:
    """모든 숙소 수동 동기화. 실패한 숙소는 이전 데이터 그대로 syncStatus 에 포함."""
    await sync_service.sync_all()
    return SyncAllResponse(
        success=True,
        sync_status=[SyncStatusDTO.from_entry(entry) for entry in store.list()],
    )


@router.post("/reset", response_model=MessageResponse)
async def reset(store: PropertyStore = Depends(get_store)) -> MessageResponse:
    store.reset_all()
    return MessageResponse(success=True, message="All properties cleared")


@router.get("/scheduler/status", response_model=SchedulerStatusResponse)
async def scheduler_status(settings: Settings = Depends(get_settings)) -> SchedulerStatusResponse:
    """스케줄러 상태 조회"""
    scheduler = get_scheduler()
    if scheduler is None:
        return SchedulerStatusResponse(running=False, next_run=None, cron_minute=settings.SYNC_CRON_MINUTE)

    job = scheduler.get_job(JOB_ID)
    next_run = None
    if job and job.next_run_time:
        next_run = job.next_run_time.isoformat()

    return SchedulerStatusResponse(
        running=scheduler.running,
        next_run=next_run,
        cron_minute=settings.SYNC_CRON_MINUTE,
    )
