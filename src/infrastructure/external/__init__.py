# src/infrastructure/external/__init__.py
"""
External service integrations for the call dashboard.

Concrete clients for the voice agent provider (Bolna) and the telephony
carrier (Knowlarity).
"""

from .bolna_service import BolnaService
from .knowlarity_service import KnowlarityService

__all__ = [
    "BolnaService",
    "KnowlarityService"
]
