from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import time

class TrainOffer(BaseModel):
    """Departure/arrival pair offered for one leg"""
    model_config = ConfigDict(frozen=True)

    departure: time
    arrival: time

    @property
    def duration_minutes(self) -> int:
        return (
            (self.arrival.hour * 60 + self.arrival.minute)
            - (self.departure.hour * 60 + self.departure.minute)
        )

class OfferRequest(BaseModel):
    """Request to regenerate the offers of a leg"""
    baseline: time
    now: Optional[time] = None

