# backend/hostly/domain/errors.py
"""
Hostly 도메인 예외

- PropertyValidationError: 등록 입력 오류 (HTTP 400)
- PropertyNotFoundError: 등록되지 않은 property_id (HTTP 404)
- FeedFetchError: iCal 다운로드 실패. FeedParser 경계 밖으로 나가지 않고
  FeedFailure 값으로 변환된다.
"""
from __future__ import annotations


class HostlyError(Exception):
    """Hostly 예외 공통 베이스"""


class PropertyValidationError(HostlyError):
    """잘못되었거나 누락된 등록 입력"""


class PropertyNotFoundError(HostlyError):
    def __init__(self, property_id: str):
        super().__init__(f"Property not found: {property_id}")
        self.property_id = property_id


class FeedFetchError(HostlyError):
    def __init__(self, url: str, cause: str):
        super().__init__(f"Failed to fetch iCal feed: {cause}")
        self.url = url
        self.cause = cause
