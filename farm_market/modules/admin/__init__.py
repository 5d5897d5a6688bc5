"""Admin analytics package."""

from .schemas import Analytics
from .service import AnalyticsService

__all__ = ["Analytics", "AnalyticsService"]
