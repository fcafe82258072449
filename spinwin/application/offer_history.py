from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from .catalog import Offer
from .ports.kv_store import KeyValueStore
from .time_utils import to_epoch_ms, from_epoch_ms

REGISTRY_KEY = "registry:contacts"
DISPLAY_ID_LENGTH = 12


def history_key(contact: str) -> str:
    return f"history:{contact}"


@dataclass
class HistoryEntry:
    id: int
    title: str
    description: str
    category: str
    symbol: str
    contact: str
    timestamp: datetime
    next_eligible_at: datetime
    unique_id: str
    consumed: bool = False
    consumed_by: Optional[str] = None
    consumed_at: Optional[datetime] = None

    @classmethod
    def create(cls, offer: Offer, contact: str, timestamp: datetime, next_eligible_at: datetime) -> "HistoryEntry":
        unique_id = f"{contact}-{to_epoch_ms(timestamp)}-{offer.id}"
        return cls(
            id=offer.id,
            title=offer.title,
            description=offer.description,
            category=offer.category,
            symbol=offer.symbol,
            contact=contact,
            timestamp=timestamp,
            next_eligible_at=next_eligible_at,
            unique_id=unique_id,
        )

    @property
    def display_id(self) -> str:
        return self.unique_id[-DISPLAY_ID_LENGTH:]

    def is_expired(self, now: datetime) -> bool:
        return now >= self.next_eligible_at

    def status(self, now: datetime) -> str:
        if self.consumed:
            return "consumed"
        if self.is_expired(now):
            return "expired"
        return "active"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "symbol": self.symbol,
            "contact": self.contact,
            "timestamp": to_epoch_ms(self.timestamp),
            "date": self.timestamp.isoformat(),
            "nextEligibleAt": to_epoch_ms(self.next_eligible_at),
            "uniqueId": self.unique_id,
            "consumed": self.consumed,
            "consumedBy": self.consumed_by,
            "consumedAt": self.consumed_at.isoformat() if self.consumed_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        consumed_at = data.get("consumedAt")
        return cls(
            id=int(data["id"]),
            title=data["title"],
            description=data.get("description", ""),
            category=data["category"],
            symbol=data.get("symbol", ""),
            contact=data["contact"],
            timestamp=from_epoch_ms(data["timestamp"]),
            next_eligible_at=from_epoch_ms(data["nextEligibleAt"]),
            unique_id=data["uniqueId"],
            consumed=bool(data.get("consumed", False)),
            consumed_by=data.get("consumedBy"),
            consumed_at=datetime.fromisoformat(consumed_at) if consumed_at else None,
        )


class OfferHistory:
    """Per-contact bounded offer history plus the registry of awarded contacts.

    Both live in the key-value store. Updates are read-modify-write with no
    transaction around them.
    """

    def __init__(self, store: KeyValueStore, limit: int = 10) -> None:
        self.store = store
        self.limit = limit

    def entries(self, contact: str) -> List[HistoryEntry]:
        raw = self.store.get(history_key(contact))
        if not isinstance(raw, list):
            return []
        return [HistoryEntry.from_dict(item) for item in raw]

    def latest(self, contact: str) -> Optional[HistoryEntry]:
        items = self.entries(contact)
        return items[-1] if items else None

    def save(self, contact: str, entries: List[HistoryEntry]) -> None:
        self.store.set(history_key(contact), [e.to_dict() for e in entries])

    def append(self, entry: HistoryEntry) -> List[HistoryEntry]:
        items = self.entries(entry.contact)
        items.append(entry)
        # FIFO eviction
        if len(items) > self.limit:
            del items[: len(items) - self.limit]
        self.save(entry.contact, items)
        return items

    def clear(self, contact: str) -> None:
        self.store.delete(history_key(contact))

    # registry

    def contacts(self) -> List[str]:
        raw = self.store.get(REGISTRY_KEY)
        return list(raw) if isinstance(raw, list) else []

    def register(self, contact: str) -> None:
        known = self.contacts()
        if contact not in known:
            known.append(contact)
            self.store.set(REGISTRY_KEY, known)

    def unregister(self, contact: str) -> None:
        known = self.contacts()
        if contact in known:
            known.remove(contact)
            self.store.set(REGISTRY_KEY, known)
