from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from ..dependencies import get_admin_service, require_admin
from ..exceptions import InvalidInput
from ..schemas.admin.admin import AdminOffersResponse, MarkConsumedRequest, MarkConsumedResponse
from ..application.services.admin_service import AdminService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/offers", response_model=AdminOffersResponse)
def list_offers(
    date: Optional[str] = Query(None, description="YYYY-MM-DD"),
    email: Optional[str] = Query(None, description="Case-insensitive contact substring"),
    contact: Optional[str] = Query(None, description="Alias of email"),
    status: Optional[str] = Query(None, description="active | expired | consumed | all"),
    admin: AdminService = Depends(get_admin_service),
):
    try:
        listing = admin.list_offers(date_filter=date, contact_substring=contact or email, status=status)
        return AdminOffersResponse(
            offers=listing.offers,
            totalCount=listing.total_count,
            filters=listing.filters,
            generatedAt=listing.generated_at.isoformat(),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching admin offers: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch offers")


@router.post("/offers", response_model=MarkConsumedResponse)
def mark_consumed(
    body: MarkConsumedRequest,
    admin: AdminService = Depends(get_admin_service),
):
    try:
        if body.action != "mark_consumed":
            raise InvalidInput(f"Unsupported action: {body.action}")
        updated = admin.set_consumed(body.identifier, consumed=body.consumed is not False, staff=body.staff)
        return MarkConsumedResponse(
            message="Offer(s) updated successfully",
            updatedCount=updated,
            actionTime=admin.clock().isoformat(),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating offer: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update offer")
