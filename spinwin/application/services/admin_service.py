import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import Any, Callable, Dict, List, Optional

from ..offer_history import HistoryEntry, OfferHistory
from ..ports.audit_logger import AuditLogger
from ..time_utils import utc_now, format_local_time
from ...exceptions import InvalidInput, NotFound

logger = logging.getLogger(__name__)

STATUSES = ("active", "expired", "consumed")


@dataclass
class OfferListing:
    offers: List[Dict[str, Any]]
    filters: Dict[str, Optional[str]]
    generated_at: datetime

    @property
    def total_count(self) -> int:
        return len(self.offers)


@dataclass
class AdminService:
    """Reconciliation view over every contact's offer history."""

    history: OfferHistory
    audit: Optional[AuditLogger] = None
    tz: tzinfo = timezone.utc
    clock: Callable[[], datetime] = field(default=utc_now)

    def all_entries(self) -> List[HistoryEntry]:
        entries: List[HistoryEntry] = []
        for contact in self.history.contacts():
            entries.extend(self.history.entries(contact))
        return entries

    def list_offers(self, date_filter: Optional[str] = None, contact_substring: Optional[str] = None,
                    status: Optional[str] = None) -> OfferListing:
        target_date: Optional[date] = None
        if date_filter:
            try:
                target_date = datetime.strptime(date_filter, "%Y-%m-%d").date()
            except ValueError:
                raise InvalidInput("Invalid date format. Use YYYY-MM-DD")
        if status and status != "all" and status not in STATUSES:
            raise InvalidInput(f"Invalid status. Must be one of: {['all', *STATUSES]}")

        now = self.clock()
        needle = contact_substring.lower() if contact_substring else None
        offers = []
        for entry in self.all_entries():
            if target_date and entry.timestamp.astimezone(self.tz).date() != target_date:
                continue
            if needle and needle not in entry.contact.lower():
                continue
            entry_status = entry.status(now)
            if status and status != "all" and entry_status != status:
                continue
            item = entry.to_dict()
            item.update({
                "isExpired": entry.is_expired(now),
                "isConsumed": entry.consumed,
                "status": entry_status,
                "displayId": entry.display_id,
                "generatedAtFormatted": format_local_time(entry.timestamp, self.tz),
            })
            offers.append(item)

        offers.sort(key=lambda o: o["timestamp"], reverse=True)
        return OfferListing(
            offers=offers,
            filters={"date": date_filter, "contact": contact_substring, "status": status},
            generated_at=now,
        )

    def set_consumed(self, identifier: Optional[str], consumed: bool = True, staff: Optional[str] = None) -> int:
        identifier = (identifier or "").strip()
        if not identifier:
            raise InvalidInput("Identifier is required")

        contact, entries, index = self._locate(identifier)
        if contact is None:
            raise NotFound("No offer found for identifier")

        entry = entries[index]
        entry.consumed = consumed
        entry.consumed_by = staff if consumed else None
        entry.consumed_at = self.clock() if consumed else None
        self.history.save(contact, entries)

        logger.info(f"Offer {entry.display_id} consumed={consumed}")
        if self.audit is not None:
            self.audit.log("offer_consumed", contact, details={
                "unique_id": entry.unique_id, "consumed": consumed, "staff": staff,
            })
        return 1

    def _locate(self, identifier: str):
        # exact unique id first, then fall back to the contact's latest entry
        for contact in self.history.contacts():
            entries = self.history.entries(contact)
            for i, entry in enumerate(entries):
                if entry.unique_id == identifier:
                    return contact, entries, i
        entries = self.history.entries(identifier)
        if entries:
            return identifier, entries, len(entries) - 1
        return None, [], -1
