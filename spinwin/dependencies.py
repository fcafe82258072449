import hmac
import logging
import random
from functools import lru_cache
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from .config import settings
from .exceptions import Unauthorized
from .application.offer_history import OfferHistory
from .application.ports.code_sender import CodeSender
from .application.ports.kv_store import KeyValueStore
from .application.time_utils import resolve_timezone
from .application.services.cooldown_service import CooldownService
from .application.services.verification_service import VerificationService
from .application.services.offer_service import OfferService
from .application.services.admin_service import AdminService
from .application.services.maintenance_service import MaintenanceService
from .infrastructure.audit.std_logger import StdAuditLogger
from .infrastructure.kv.memory_store import InMemoryKeyValueStore
from .infrastructure.kv.redis_store import RedisKeyValueStore
from .infrastructure.messaging.channel_sender import ChannelCodeSender
from .infrastructure.messaging.email_sender import EmailCodeSender
from .infrastructure.messaging.twilio_sms_sender import TwilioSmsCodeSender

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache()
def get_store() -> KeyValueStore:
    if settings.REDIS_URL:
        logger.info("Using Redis key-value store")
        return RedisKeyValueStore(url=settings.REDIS_URL, prefix=settings.KV_PREFIX)
    logger.info("REDIS_URL not set, using in-memory key-value store")
    return InMemoryKeyValueStore()


@lru_cache()
def get_audit_logger() -> StdAuditLogger:
    return StdAuditLogger()


@lru_cache()
def get_code_sender() -> ChannelCodeSender:
    ttl_minutes = settings.OTP_TTL_SECONDS // 60
    email = EmailCodeSender(
        api_url=settings.EMAIL_API_URL,
        api_key=settings.EMAIL_API_KEY,
        from_email=settings.EMAIL_FROM,
        from_name=settings.EMAIL_FROM_NAME,
        brand=settings.BRAND_NAME,
        ttl_minutes=ttl_minutes,
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
        debug=settings.DEBUG,
    )
    sms = TwilioSmsCodeSender(
        account_sid=settings.TWILIO_ACCOUNT_SID,
        auth_token=settings.TWILIO_AUTH_TOKEN,
        from_number=settings.TWILIO_PHONE_NUMBER,
        brand=settings.BRAND_NAME,
        ttl_minutes=ttl_minutes,
    )
    return ChannelCodeSender(email=email, sms=sms)


def get_history(store: KeyValueStore = Depends(get_store)) -> OfferHistory:
    return OfferHistory(store, limit=settings.HISTORY_LIMIT)


def get_cooldown_service(
    store: KeyValueStore = Depends(get_store),
    history: OfferHistory = Depends(get_history),
) -> CooldownService:
    return CooldownService(store=store, history=history, tz=resolve_timezone(settings.COOLDOWN_TIMEZONE))


def get_verification_service(
    store: KeyValueStore = Depends(get_store),
    cooldown: CooldownService = Depends(get_cooldown_service),
    sender: CodeSender = Depends(get_code_sender),
) -> VerificationService:
    return VerificationService(
        store=store,
        sender=sender,
        cooldown=cooldown,
        audit=get_audit_logger(),
        otp_ttl_seconds=settings.OTP_TTL_SECONDS,
        verified_ttl_seconds=settings.VERIFIED_TTL_SECONDS,
        enable_email=settings.ENABLE_EMAIL_OTP,
        enable_phone=settings.ENABLE_PHONE_OTP,
    )


def get_offer_service(
    cooldown: CooldownService = Depends(get_cooldown_service),
    history: OfferHistory = Depends(get_history),
    verification: VerificationService = Depends(get_verification_service),
) -> OfferService:
    return OfferService(
        cooldown=cooldown,
        history=history,
        verification=verification if settings.REQUIRE_VERIFIED_CONTACT else None,
        audit=get_audit_logger(),
        rng=random.SystemRandom(),
        win_probability=settings.WIN_PROBABILITY,
    )


def get_admin_service(history: OfferHistory = Depends(get_history)) -> AdminService:
    return AdminService(history=history, audit=get_audit_logger(), tz=resolve_timezone(settings.COOLDOWN_TIMEZONE))


def get_maintenance_service(
    store: KeyValueStore = Depends(get_store),
    history: OfferHistory = Depends(get_history),
    cooldown: CooldownService = Depends(get_cooldown_service),
) -> MaintenanceService:
    return MaintenanceService(
        store=store,
        history=history,
        cooldown=cooldown,
        audit=get_audit_logger(),
        retention_days=settings.HISTORY_RETENTION_DAYS,
    )


def _check_bearer(credentials: Optional[HTTPAuthorizationCredentials], secret: str) -> None:
    token = credentials.credentials if credentials else ""
    if not token or not secret or not hmac.compare_digest(token.encode(), secret.encode()):
        logger.warning("Rejected request with missing or invalid bearer token")
        raise Unauthorized()


def require_admin(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> None:
    _check_bearer(credentials, settings.ADMIN_API_KEY)


def require_cleanup_key(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> None:
    _check_bearer(credentials, settings.CLEANUP_API_KEY)
