from datetime import timedelta

from spinwin.application.catalog import CATALOG
from spinwin.application.offer_history import HistoryEntry
from spinwin.application.services.maintenance_service import MaintenanceService
from spinwin.application.services.verification_service import otp_key


def _award(history, cooldown, contact, when):
    entry = HistoryEntry.create(CATALOG[0], contact, when, cooldown.next_eligible_at(when))
    history.append(entry)
    history.register(contact)
    return entry


def test_sweep_drops_old_entries_and_stale_cooldowns(store, history, cooldown, clock, audit):
    now = clock()
    _award(history, cooldown, "old@x.com", now - timedelta(days=8))
    _award(history, cooldown, "mixed@x.com", now - timedelta(days=9))
    _award(history, cooldown, "mixed@x.com", now - timedelta(hours=3))
    # stale marker written directly: awarded two days ago
    store.set("cooldown:old@x.com", str(int((now - timedelta(days=2)).timestamp() * 1000)))
    cooldown.mark_awarded("mixed@x.com", now - timedelta(hours=3))

    svc = MaintenanceService(store=store, history=history, cooldown=cooldown, audit=audit, clock=clock)
    stats = svc.sweep()

    assert stats.cleaned_offers == 2
    assert stats.cleaned_cooldowns == 1
    assert history.contacts() == ["mixed@x.com"]
    assert len(history.entries("mixed@x.com")) == 1
    assert history.entries("old@x.com") == []
    assert cooldown.last_award("old@x.com") is None
    assert cooldown.last_award("mixed@x.com") is not None
    assert audit.entries[-1][0] == "sweep"


def test_sweep_reports_purged_expired_items(store, history, cooldown, clock):
    store.set_with_expiry(otp_key("a@b.com"), 600, "123456")
    clock.advance(minutes=11)
    stats = MaintenanceService(store=store, history=history, cooldown=cooldown, clock=clock).sweep()
    assert stats.cleaned_otps == 1
    assert stats.to_dict()["cleanedOTPs"] == 1
    assert "cleanupTime" in stats.to_dict()
