from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional


class APIException(HTTPException):
    status_code_default = 400

    def __init__(self, detail: str, status_code: Optional[int] = None, extra: Optional[Dict[str, Any]] = None):
        super().__init__(status_code=status_code or self.status_code_default, detail=detail)
        self.extra = extra or {}


class InvalidInput(APIException):
    """Malformed contact, method or missing fields; shown to the user as-is."""
    status_code_default = 400


class InvalidFormat(InvalidInput):
    pass


class CodeMismatch(InvalidInput):
    pass


class Unauthorized(APIException):
    status_code_default = 401

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail)


class NotFound(APIException):
    status_code_default = 404


class TransportFailure(APIException):
    status_code_default = 502


class CooldownActive(APIException):
    """Raised while a contact waits for its next spin.

    Not a failure as such: the payload carries the remaining time and the
    contact's last offer so the client can render them.
    """
    status_code_default = 429

    def __init__(self, cooldown_info: Dict[str, Any], existing_offer: Optional[Dict[str, Any]] = None,
                 detail: str = "Cooldown active"):
        message = (
            "You have already claimed your offer today. "
            f"Please wait {cooldown_info.get('display', '')} before trying again"
        )
        super().__init__(detail, extra={
            "message": message,
            "cooldownActive": True,
            "cooldownInfo": cooldown_info,
            "existingOffer": existing_offer,
        })
        self.cooldown_info = cooldown_info
        self.existing_offer = existing_offer


def create_error_response(error_message: str, extra: Optional[Dict[str, Any]] = None) -> dict:
    """Create a standardized error response"""
    body = {
        "success": False,
        "data": None,
        "error": error_message,
    }
    if extra:
        body.update(extra)
    return body


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(str(exc.detail), getattr(exc, "extra", None))
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", []) if p != "body")
        message = f"Invalid request: {field} {first.get('msg', '')}".strip()
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content=create_error_response(message))
