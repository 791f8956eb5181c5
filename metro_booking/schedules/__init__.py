"""
Schedules Module

Train offers generated from operating hours and a fixed train interval.
"""

from .service import TimetableGenerator, to_minutes, from_minutes
from .schemas import TrainOffer, OfferRequest

__all__ = [
    "TimetableGenerator",
    "to_minutes",
    "from_minutes",
    "TrainOffer",
    "OfferRequest"
]
