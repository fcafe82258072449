import logging
from typing import Optional

from twilio.rest import Client
from requests import RequestException
from twilio.base.exceptions import TwilioException

from ...application.ports.code_sender import CodeSender
from .templates import otp_sms

logger = logging.getLogger(__name__)


class TwilioSmsCodeSender(CodeSender):
    def __init__(self, account_sid: str, auth_token: str, from_number: str, brand: str,
                 ttl_minutes: int = 10, client: Optional[Client] = None) -> None:
        self.from_number = from_number
        self.brand = brand
        self.ttl_minutes = ttl_minutes
        self.client = client
        if self.client is None and account_sid and auth_token:
            self.client = Client(account_sid, auth_token)

    @property
    def configured(self) -> bool:
        return self.client is not None and bool(self.from_number)

    def send_code(self, contact: str, code: str, method: str = "phone") -> bool:
        if not self.configured:
            logger.info(f"Twilio not configured. SMS OTP for {contact}: {code}")
            return True
        try:
            message = self.client.messages.create(
                to=contact,
                from_=self.from_number,
                body=otp_sms(code, self.brand, self.ttl_minutes),
            )
        except (TwilioException, RequestException) as e:
            logger.error(f"Error sending OTP SMS: {e}")
            return False
        logger.info(f"OTP SMS queued: {message.sid}")
        return True
