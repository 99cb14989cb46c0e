# backend/hostly/api/api.py
"""
Hostly API Router
"""
from fastapi import APIRouter

from hostly.api import health, properties, reservations, sync

api_router = APIRouter()

# Health check
api_router.include_router(health.router)

# 숙소 등록/삭제/단건 동기화
api_router.include_router(properties.router)

# 예약 조회
api_router.include_router(reservations.router)

# 전체 동기화 / 리셋 / 스케줄러 상태
api_router.include_router(sync.router)
