from fastapi import APIRouter, Depends, HTTPException
import logging

from ..config import settings
from ..dependencies import get_verification_service, get_cooldown_service
from ..schemas.verification.verification import (
    SendOTPRequest, SendOTPResponse, VerifyOTPRequest, VerifyOTPResponse, OTPConfigResponse,
)
from ..application.services.verification_service import VerificationService
from ..application.services.cooldown_service import CooldownService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Verification"])


@router.post("/send-otp", response_model=SendOTPResponse, response_model_exclude_none=True)
def send_otp(
    body: SendOTPRequest,
    verification: VerificationService = Depends(get_verification_service),
):
    try:
        code = verification.request_code(body.contact, body.method)
        return SendOTPResponse(
            message="OTP sent successfully",
            # For development only
            otp=code if settings.DEBUG else None,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error sending OTP: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to send OTP")


@router.post("/verify-otp", response_model=VerifyOTPResponse)
def verify_otp(
    body: VerifyOTPRequest,
    verification: VerificationService = Depends(get_verification_service),
    cooldown: CooldownService = Depends(get_cooldown_service),
):
    try:
        verification.verify_code(body.contact, body.otp)
        # a verified contact may still be waiting for its next spin
        cooldown.ensure_eligible(body.contact.strip())
        return VerifyOTPResponse(message="OTP verified successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error verifying OTP: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to verify OTP")


@router.get("/otp-config", response_model=OTPConfigResponse)
def otp_config():
    if not settings.otp_config_valid:
        logger.warning("Both email and phone OTP are disabled")
    return OTPConfigResponse(
        enableEmail=settings.ENABLE_EMAIL_OTP,
        enablePhone=settings.ENABLE_PHONE_OTP,
        defaultMethod=settings.DEFAULT_CONTACT_METHOD,
    )
