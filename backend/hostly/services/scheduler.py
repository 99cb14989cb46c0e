# backend/hostly/services/scheduler.py
"""
Hostly Scheduler Service (APScheduler 기반)

매시 정각(SYNC_CRON_MINUTE 분)에 등록된 모든 숙소의 iCal 을 동기화합니다.

사용법:
    from hostly.services.scheduler import start_scheduler, shutdown_scheduler

    # FastAPI lifespan에서
    start_scheduler(sync_service)
    ...
    shutdown_scheduler()
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from hostly.services.ical_sync_service import IcalSyncService

logger = logging.getLogger(__name__)

JOB_ID = "ical_sync_job"

# 전역 스케줄러 인스턴스
_scheduler: Optional[AsyncIOScheduler] = None


async def ical_sync_job(sync_service: IcalSyncService) -> None:
    """
    iCal Sync Job

    요청 트래픽과 무관하게 정해진 주기로 실행된다.
    이전 실행이 아직 끝나지 않았어도 겹쳐서 실행될 수 있다 (property 단위 last-write-wins).
    """
    start_time = datetime.now(timezone.utc)
    logger.info(f"SCHEDULER: iCal sync job started at {start_time.isoformat()}")

    try:
        outcomes = await sync_service.sync_all()
    except Exception:
        logger.exception("SCHEDULER: iCal sync job failed")
        return

    failed = [o.property_id for o in outcomes if not o.success]
    duration = (datetime.now(timezone.utc) - start_time).total_seconds()
    logger.info(
        f"SCHEDULER: iCal sync job finished in {duration:.1f}s "
        f"(properties={len(outcomes)}, failed={len(failed)})"
    )
    if failed:
        logger.warning(f"SCHEDULER: failed properties: {', '.join(failed)}")


def start_scheduler(sync_service: IcalSyncService, cron_minute: int = 0) -> AsyncIOScheduler:
    """
    스케줄러 시작 (실행 중인 이벤트 루프 안에서 호출해야 함)
    """
    global _scheduler

    if _scheduler is not None:
        logger.warning("SCHEDULER: already running")
        return _scheduler

    _scheduler = AsyncIOScheduler(timezone="UTC")

    _scheduler.add_job(
        ical_sync_job,
        trigger=CronTrigger(minute=cron_minute, timezone="UTC"),
        args=[sync_service],
        id=JOB_ID,
        name="iCal Sync (hourly)",
        replace_existing=True,
        max_instances=3,
        coalesce=True,
        misfire_grace_time=300,
    )

    _scheduler.start()

    logger.info(f"SCHEDULER: started, iCal sync every hour at minute {cron_minute:02d}")
    logger.info(f"SCHEDULER: next run: {_scheduler.get_job(JOB_ID).next_run_time}")
    return _scheduler


def shutdown_scheduler() -> None:
    """스케줄러 종료"""
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.shutdown(wait=False)
    _scheduler = None
    logger.info("SCHEDULER: stopped")


def get_scheduler() -> Optional[AsyncIOScheduler]:
    """현재 스케줄러 인스턴스 반환"""
    return _scheduler
