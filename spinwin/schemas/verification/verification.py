# spinwin/schemas/verification.py
from pydantic import BaseModel, Field, AliasChoices
from typing import Optional


class SendOTPRequest(BaseModel):
    contact: Optional[str] = Field(None, description="Email address or phone number")
    method: Optional[str] = Field(None, description="'email' or 'phone'")


class SendOTPResponse(BaseModel):
    success: bool = True
    message: str
    otp: Optional[str] = Field(None, description="Only returned when DEBUG is on")


class VerifyOTPRequest(BaseModel):
    contact: Optional[str] = None
    otp: Optional[str] = Field(None, validation_alias=AliasChoices("otp", "code"))


class VerifyOTPResponse(BaseModel):
    success: bool = True
    message: str


class OTPConfigResponse(BaseModel):
    enableEmail: bool
    enablePhone: bool
    defaultMethod: str
