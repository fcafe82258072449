import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Dict, Optional

from ..offer_history import OfferHistory
from ..ports.kv_store import KeyValueStore
from ..time_utils import (
    utc_now, same_time_next_day, format_remaining, to_epoch_ms, from_epoch_ms,
)
from ...exceptions import CooldownActive

logger = logging.getLogger(__name__)


def cooldown_key(contact: str) -> str:
    return f"cooldown:{contact}"


@dataclass
class CooldownInfo:
    next_eligible_at: datetime
    remaining_ms: int
    hours: int
    minutes: int
    seconds: int
    total_seconds: int
    display: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nextEligibleAt": self.next_eligible_at.isoformat(),
            "remainingMs": self.remaining_ms,
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "totalSeconds": self.total_seconds,
            "display": self.display,
        }


@dataclass
class CooldownService:
    store: KeyValueStore
    history: OfferHistory
    tz: tzinfo = timezone.utc
    clock: Callable[[], datetime] = field(default=utc_now)

    def next_eligible_at(self, instant: datetime) -> datetime:
        return same_time_next_day(instant, self.tz)

    def last_award(self, contact: str) -> Optional[datetime]:
        raw = self.store.get(cooldown_key(contact))
        if raw is None:
            return None
        try:
            return from_epoch_ms(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed cooldown marker for {contact!r}: {raw!r}")
            return None

    def is_eligible(self, contact: str, at: Optional[datetime] = None) -> bool:
        last = self.last_award(contact)
        if last is None:
            return True
        now = at or self.clock()
        return now >= self.next_eligible_at(last)

    def remaining(self, contact: str, at: Optional[datetime] = None) -> CooldownInfo:
        now = at or self.clock()
        last = self.last_award(contact)
        next_at = self.next_eligible_at(last) if last is not None else now
        remaining_ms = max(0, to_epoch_ms(next_at) - to_epoch_ms(now))
        parts = format_remaining(remaining_ms)
        return CooldownInfo(
            next_eligible_at=next_at,
            remaining_ms=remaining_ms,
            hours=parts.hours,
            minutes=parts.minutes,
            seconds=parts.seconds,
            total_seconds=parts.total_seconds,
            display=parts.display,
        )

    def mark_awarded(self, contact: str, instant: datetime) -> int:
        next_at = self.next_eligible_at(instant)
        ttl = math.ceil((to_epoch_ms(next_at) - to_epoch_ms(instant)) / 1000)
        self.store.set_with_expiry(cooldown_key(contact), max(1, ttl), str(to_epoch_ms(instant)))
        return ttl

    def clear(self, contact: str) -> None:
        self.store.delete(cooldown_key(contact))

    def ensure_eligible(self, contact: str) -> None:
        now = self.clock()
        if self.is_eligible(contact, at=now):
            return
        info = self.remaining(contact, at=now)
        latest = self.history.latest(contact)
        raise CooldownActive(info.to_dict(), latest.to_dict() if latest else None)
