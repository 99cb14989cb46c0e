# backend/hostly/services/classifiers/base.py
from abc import ABC, abstractmethod
from typing import Optional

from hostly.domain.models import RawCalendarEvent, Reservation


class EventClassifier(ABC):
    @abstractmethod
    def classify(self, event: RawCalendarEvent, property_id: str) -> Optional[Reservation]:
        """예약이면 Reservation, 건너뛸 이벤트면 None"""
        raise NotImplementedError
