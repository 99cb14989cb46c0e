# backend/hostly/services/ical_fetcher.py
"""
iCal Fetcher

URL 에서 iCal 원문 텍스트를 가져오는 I/O 경계. 비즈니스 로직 없음.
- 리다이렉트 따라감
- 네트워크 오류 / 타임아웃 / 5xx 는 지수 백오프로 재시도
- 4xx 는 재시도하지 않음
- 최종 실패 시 FeedFetchError
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from hostly.domain.errors import FeedFetchError

logger = logging.getLogger(__name__)


class IcalFetcher:
    def __init__(
        self,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff_seconds: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            timeout: 요청 타임아웃 (초)
            max_attempts: 최대 시도 횟수 (1 이면 재시도 없음)
            backoff_seconds: 첫 재시도 대기 시간, 이후 2배씩 증가
            transport: httpx transport (테스트에서 MockTransport 주입)
        """
        self.timeout = timeout
        self.max_attempts = max(1, max_attempts)
        self.backoff_seconds = backoff_seconds
        self.transport = transport

    async def fetch(self, url: str) -> str:
        last_cause = "unknown error"

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        ) as client:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    response = await client.get(url)
                    response.raise_for_status()
                    return response.text
                except httpx.TimeoutException:
                    last_cause = f"timeout after {self.timeout}s"
                except httpx.HTTPStatusError as e:
                    status_code = e.response.status_code
                    last_cause = f"HTTP {status_code}"
                    if status_code < 500:
                        logger.error(f"ICAL_FETCHER: {url} returned {status_code}, not retrying")
                        raise FeedFetchError(url, last_cause) from e
                except httpx.HTTPError as e:
                    last_cause = f"{type(e).__name__}: {e}"

                if attempt < self.max_attempts:
                    delay = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.warning(
                        f"ICAL_FETCHER: attempt {attempt}/{self.max_attempts} failed for {url}: "
                        f"{last_cause}. Retrying in {delay:.1f}s"
                    )
                    await asyncio.sleep(delay)

        logger.error(f"ICAL_FETCHER: all {self.max_attempts} attempts failed for {url}: {last_cause}")
        raise FeedFetchError(url, last_cause)
