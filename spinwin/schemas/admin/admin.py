# spinwin/schemas/admin.py
from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional


class AdminOffersResponse(BaseModel):
    success: bool = True
    offers: List[Dict[str, Any]]
    totalCount: int
    filters: Dict[str, Optional[str]]
    generatedAt: str


class MarkConsumedRequest(BaseModel):
    action: str = "mark_consumed"
    identifier: Optional[str] = Field(None, description="Offer uniqueId, or a contact to target its latest offer")
    consumed: Optional[bool] = True
    staff: Optional[str] = None


class MarkConsumedResponse(BaseModel):
    success: bool = True
    message: str
    updatedCount: int
    actionTime: str


class CleanupResponse(BaseModel):
    success: bool = True
    message: str
    stats: Dict[str, Any]
