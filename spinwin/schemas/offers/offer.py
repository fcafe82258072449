# spinwin/schemas/offer.py
from pydantic import BaseModel
from typing import Optional


class GenerateOfferRequest(BaseModel):
    contact: Optional[str] = None


class OfferOut(BaseModel):
    id: int
    title: str
    description: str
    category: str
    symbol: str
    timestamp: int
    nextEligibleAt: int
    uniqueId: str
    displayId: str


class CooldownInfoOut(BaseModel):
    nextEligibleAt: str
    remainingMs: int
    hours: int
    minutes: int
    seconds: int
    totalSeconds: int
    display: str


class GenerateOfferResponse(BaseModel):
    success: bool = True
    offer: OfferOut
    message: str
    cooldownInfo: CooldownInfoOut
