import logging
from typing import Optional

import httpx

from ...application.ports.code_sender import CodeSender
from .templates import otp_email

logger = logging.getLogger(__name__)


class EmailCodeSender(CodeSender):
    """Sends codes through a transactional email HTTP API (Brevo-compatible)."""

    def __init__(self, api_url: str, api_key: str, from_email: str, from_name: str, brand: str,
                 ttl_minutes: int = 10, timeout: float = 20.0, debug: bool = False,
                 client: Optional[httpx.Client] = None) -> None:
        self.api_url = api_url
        self.api_key = api_key
        self.from_email = from_email
        self.from_name = from_name
        self.brand = brand
        self.ttl_minutes = ttl_minutes
        self.debug = debug
        self.client = client or httpx.Client(timeout=timeout)

    def send_code(self, contact: str, code: str, method: str = "email") -> bool:
        if not self.api_key:
            logger.info(f"Email API not configured. OTP for {contact}: {code}")
            return True

        template = otp_email(code, self.brand, self.ttl_minutes)
        payload = {
            "sender": {"name": self.from_name, "email": self.from_email},
            "to": [{"email": contact}],
            "subject": template["subject"],
            "htmlContent": template["html"],
            "textContent": template["text"],
        }
        try:
            r = self.client.post(
                self.api_url,
                headers={"api-key": self.api_key, "Content-Type": "application/json"},
                json=payload,
            )
            if r.status_code >= 400:
                raise RuntimeError(f"Email API error {r.status_code}: {r.text}")
        except (httpx.HTTPError, RuntimeError) as e:
            logger.error(f"Error sending OTP email: {e}")
            if self.debug:
                logger.info(f"Development mode: OTP for {contact}: {code}")
                return True
            return False

        logger.info(f"OTP email sent to {contact}")
        return True
