# backend/hostly/services/classifiers/__init__.py

from .base import EventClassifier
from .rule_based import RuleBasedEventClassifier

__all__ = [
    "EventClassifier",
    "RuleBasedEventClassifier",
]
