from fastapi import APIRouter, Depends, HTTPException
import logging

from ..dependencies import get_offer_service
from ..schemas.offers.offer import GenerateOfferRequest, GenerateOfferResponse, OfferOut, CooldownInfoOut
from ..application.catalog import WIN
from ..application.services.offer_service import OfferService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Offers"])


@router.post("/generate-offer", response_model=GenerateOfferResponse)
def generate_offer(
    body: GenerateOfferRequest,
    offers: OfferService = Depends(get_offer_service),
):
    try:
        result = offers.award(body.contact)
        entry = result.entry
        data = entry.to_dict()
        return GenerateOfferResponse(
            offer=OfferOut(
                id=entry.id,
                title=entry.title,
                description=entry.description,
                category=entry.category,
                symbol=entry.symbol,
                timestamp=data["timestamp"],
                nextEligibleAt=data["nextEligibleAt"],
                uniqueId=entry.unique_id,
                displayId=result.display_id,
            ),
            message=(
                "Congratulations! You won an amazing offer!"
                if entry.category == WIN
                else "Keep trying! Better luck next time!"
            ),
            cooldownInfo=CooldownInfoOut(**result.cooldown.to_dict()),
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating offer: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to generate offer")
