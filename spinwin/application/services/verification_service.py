import logging
import random
import re
from dataclasses import dataclass, field
from typing import Optional

from ..ports.kv_store import KeyValueStore
from ..ports.code_sender import CodeSender
from ..ports.audit_logger import AuditLogger
from .cooldown_service import CooldownService
from ...exceptions import InvalidInput, InvalidFormat, CodeMismatch, NotFound, TransportFailure

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[\d\s\-()]{10,}$")
METHODS = ("email", "phone")


def otp_key(contact: str) -> str:
    return f"otp:{contact}"


def verified_key(contact: str) -> str:
    return f"verified:{contact}"


def validate_contact(contact: str, method: str) -> None:
    if method == "email":
        if not EMAIL_RE.match(contact):
            raise InvalidFormat("Invalid email format")
    elif method == "phone":
        digits = sum(ch.isdigit() for ch in contact)
        if not PHONE_RE.match(contact) or digits < 10:
            raise InvalidFormat("Invalid phone format")
    else:
        raise InvalidFormat("Method must be 'email' or 'phone'")


@dataclass
class VerificationService:
    store: KeyValueStore
    sender: CodeSender
    cooldown: Optional[CooldownService] = None
    audit: Optional[AuditLogger] = None
    rng: random.Random = field(default_factory=random.SystemRandom)
    otp_ttl_seconds: int = 600
    verified_ttl_seconds: int = 600
    enable_email: bool = True
    enable_phone: bool = True

    def generate_code(self) -> str:
        return str(self.rng.randint(100000, 999999))

    def request_code(self, contact: Optional[str], method: Optional[str]) -> str:
        contact = (contact or "").strip()
        if not contact or not method:
            raise InvalidInput("Contact and method are required")
        validate_contact(contact, method)
        if method == "email" and not self.enable_email:
            raise InvalidInput("Email verification is not enabled")
        if method == "phone" and not self.enable_phone:
            raise InvalidInput("Phone verification is not enabled")

        if self.cooldown is not None:
            self.cooldown.ensure_eligible(contact)

        code = self.generate_code()
        self.store.set_with_expiry(otp_key(contact), self.otp_ttl_seconds, code)

        if not self.sender.send_code(contact, code, method):
            self.store.delete(otp_key(contact))
            self._audit("otp_requested", contact, success=False, details={"method": method})
            raise TransportFailure("Failed to send OTP")

        self._audit("otp_requested", contact, details={"method": method})
        logger.info(f"OTP issued via {method}")
        return code

    def verify_code(self, contact: Optional[str], code: Optional[str]) -> None:
        contact = (contact or "").strip()
        code = (code or "").strip()
        if not contact or not code:
            raise InvalidInput("Contact and OTP are required")

        stored = self.store.get(otp_key(contact))
        if stored is None:
            self._audit("otp_verified", contact, success=False, details={"reason": "not_found"})
            raise NotFound("OTP expired or not found")
        if str(stored) != code:
            self._audit("otp_verified", contact, success=False, details={"reason": "mismatch"})
            raise CodeMismatch("Invalid OTP")

        # single use
        self.store.delete(otp_key(contact))
        self.store.set_with_expiry(verified_key(contact), self.verified_ttl_seconds, "1")
        self._audit("otp_verified", contact)

    def is_verified(self, contact: str) -> bool:
        return self.store.get(verified_key(contact)) is not None

    def consume_verification(self, contact: str) -> None:
        self.store.delete(verified_key(contact))

    def _audit(self, action: str, contact: str, success: bool = True, details=None) -> None:
        if self.audit is not None:
            self.audit.log(action, contact, success=success, details=details)
