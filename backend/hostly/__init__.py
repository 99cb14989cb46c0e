# backend/hostly/__init__.py
"""Hostly iCal sync backend."""

__version__ = "1.0.0"
