import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, Optional

from ..offer_history import OfferHistory
from ..ports.audit_logger import AuditLogger
from ..ports.kv_store import KeyValueStore
from ..time_utils import utc_now
from .cooldown_service import CooldownService

logger = logging.getLogger(__name__)


@dataclass
class SweepStats:
    cleaned_offers: int
    cleaned_cooldowns: int
    cleaned_otps: int
    cleanup_time: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cleanedOffers": self.cleaned_offers,
            "cleanedCooldowns": self.cleaned_cooldowns,
            "cleanedOTPs": self.cleaned_otps,
            "cleanupTime": self.cleanup_time.isoformat(),
        }


@dataclass
class MaintenanceService:
    store: KeyValueStore
    history: OfferHistory
    cooldown: CooldownService
    audit: Optional[AuditLogger] = None
    retention_days: int = 7
    clock: Callable[[], datetime] = field(default=utc_now)

    def sweep(self) -> SweepStats:
        now = self.clock()
        cutoff = now - timedelta(days=self.retention_days)

        # OTP and verified markers only need help on stores without native TTL
        purged = self.store.purge_expired()

        cleaned_offers = 0
        cleaned_cooldowns = 0
        for contact in self.history.contacts():
            entries = self.history.entries(contact)
            kept = [e for e in entries if e.timestamp > cutoff]
            if len(kept) != len(entries):
                cleaned_offers += len(entries) - len(kept)
                if kept:
                    self.history.save(contact, kept)
                else:
                    self.history.clear(contact)
                    self.history.unregister(contact)

            if self.cooldown.last_award(contact) is not None and self.cooldown.is_eligible(contact, at=now):
                self.cooldown.clear(contact)
                cleaned_cooldowns += 1

        stats = SweepStats(cleaned_offers, cleaned_cooldowns, purged, now)
        logger.info(f"Sweep finished: {stats.to_dict()}")
        if self.audit is not None:
            self.audit.log("sweep", "system", details=stats.to_dict())
        return stats
