"""Reviews domain package."""

from .models import Review
from .service import ReviewService

__all__ = ["Review", "ReviewService"]
