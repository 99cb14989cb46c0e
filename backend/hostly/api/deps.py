# backend/hostly/api/deps.py
from fastapi import Request

from hostly.core.config import Settings
from hostly.repositories.property_store import PropertyStore
from hostly.services.ical_sync_service import IcalSyncService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> PropertyStore:
    return request.app.state.store


def get_sync_service(request: Request) -> IcalSyncService:
    return request.app.state.sync_service
