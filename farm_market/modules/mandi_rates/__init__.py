"""Mandi reference-rate domain package."""

from .models import MandiRate
from .service import SEED_RATES, MandiRateService

__all__ = ["MandiRate", "MandiRateService", "SEED_RATES"]
