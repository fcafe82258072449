import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Tuple

from ..catalog import CATALOG, Offer, partition
from ..offer_history import HistoryEntry, OfferHistory
from ..ports.audit_logger import AuditLogger
from ..time_utils import utc_now
from .cooldown_service import CooldownInfo, CooldownService
from .verification_service import VerificationService
from ...exceptions import InvalidInput

logger = logging.getLogger(__name__)


@dataclass
class AwardResult:
    entry: HistoryEntry
    cooldown: CooldownInfo

    @property
    def unique_id(self) -> str:
        return self.entry.unique_id

    @property
    def display_id(self) -> str:
        return self.entry.display_id


@dataclass
class OfferService:
    cooldown: CooldownService
    history: OfferHistory
    catalog: Tuple[Offer, ...] = CATALOG
    verification: Optional[VerificationService] = None
    audit: Optional[AuditLogger] = None
    rng: random.Random = field(default_factory=random.Random)
    win_probability: float = 0.4
    clock: Callable[[], datetime] = field(default=utc_now)

    def __post_init__(self) -> None:
        self._wins, self._losses = partition(self.catalog)

    def draw(self) -> Offer:
        r = self.rng.random()
        pool = self._wins if r < self.win_probability else self._losses
        return pool[int(self.rng.random() * len(pool))]

    def award(self, contact: Optional[str]) -> AwardResult:
        contact = (contact or "").strip()
        if not contact:
            raise InvalidInput("Contact is required")
        if self.verification is not None and not self.verification.is_verified(contact):
            raise InvalidInput("Please verify your contact before spinning")

        self.cooldown.ensure_eligible(contact)

        now = self.clock()
        offer = self.draw()
        entry = HistoryEntry.create(offer, contact, now, self.cooldown.next_eligible_at(now))
        self.history.append(entry)
        self.history.register(contact)
        self.cooldown.mark_awarded(contact, now)
        if self.verification is not None:
            self.verification.consume_verification(contact)

        logger.info(f"Awarded offer {offer.id} ({offer.category}) id={entry.display_id}")
        if self.audit is not None:
            self.audit.log("offer_awarded", contact, details={"offer_id": offer.id, "category": offer.category})
        return AwardResult(entry=entry, cooldown=self.cooldown.remaining(contact, at=now))
