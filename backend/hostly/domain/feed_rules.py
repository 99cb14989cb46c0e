# backend/hostly/domain/feed_rules.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Literal, Tuple

EventField = Literal["summary", "description"]


@dataclass(frozen=True)
class BlackoutRule:
    """
    차단(blackout) 판정 룰 하나.

    - keywords: 하나라도 포함되면 매칭 후보 (OR)
    - negatives: 하나라도 포함되면 이 룰은 매칭되지 않음
    텍스트는 소문자로 비교한다. 여러 BlackoutRule 은 OR 로 묶인다.
    """

    keywords: Tuple[str, ...]
    negatives: Tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        if not any(k in lowered for k in self.keywords):
            return False
        return not any(n in lowered for n in self.negatives)


@dataclass(frozen=True)
class GuestNameRule:
    """
    게스트 이름 추출 룰. pattern 의 첫 번째 그룹이 이름이 된다.
    첫 매칭만 사용하고, 공백 제거 후 빈 문자열이면 다음 룰로 넘어간다.
    """

    source_field: EventField
    pattern: re.Pattern[str]

    def extract(self, text: str) -> str | None:
        match = self.pattern.search(text or "")
        if not match:
            return None
        name = match.group(1).strip()
        return name or None


@dataclass(frozen=True)
class FeedDialect:
    """
    플랫폼별 iCal SUMMARY/DESCRIPTION 관례.

    새 플랫폼은 FeedDialect 를 하나 더 만들어서 분류기에 넘기면 된다.
    """

    source: str
    blackout_rules: List[BlackoutRule]
    guest_name_rules: List[GuestNameRule]
    fallback_guest_name: str
    eligible_component_types: Tuple[str, ...] = ("VEVENT",)
    total_amount: int = 0

    def is_blackout(self, summary: str) -> bool:
        return any(rule.matches(summary) for rule in self.blackout_rules)

    def extract_guest_name(self, summary: str, description: str) -> str:
        texts = {"summary": summary, "description": description}
        for rule in self.guest_name_rules:
            name = rule.extract(texts[rule.source_field])
            if name:
                return name
        return self.fallback_guest_name


def get_airbnb_dialect() -> FeedDialect:
    """
    Airbnb iCal 관례

    - 예약: SUMMARY = "Reserved - Airbnb (HMXXXXXXXX)" 또는 "Reserved - 게스트명"
    - 차단: SUMMARY = "Airbnb (Not available)"
    - 같은 캘린더에 예약과 차단이 섞여 오기 때문에 텍스트로만 구분 가능
    """
    return FeedDialect(
        source="airbnb",
        blackout_rules=[
            BlackoutRule(keywords=("not available",)),
            BlackoutRule(keywords=("airbnb",), negatives=("reserved",)),
        ],
        guest_name_rules=[
            GuestNameRule(
                source_field="summary",
                pattern=re.compile(r"reserved\s*[-–]\s*(.+)", re.IGNORECASE),
            ),
            GuestNameRule(
                source_field="description",
                pattern=re.compile(r"(?:guest|name):\s*(.+)", re.IGNORECASE),
            ),
        ],
        fallback_guest_name="Airbnb Guest",
    )
