from datetime import datetime, timezone

import pytest

from spinwin.application.catalog import CATALOG, WIN, LOSE, Offer
from spinwin.application.offer_history import REGISTRY_KEY
from spinwin.application.services.offer_service import OfferService
from spinwin.application.services.verification_service import VerificationService, verified_key
from spinwin.exceptions import CooldownActive, InvalidInput


def make_service(cooldown, history, clock, rng, **kwargs):
    return OfferService(cooldown=cooldown, history=history, rng=rng, clock=clock, **kwargs)


def test_draw_splits_at_win_probability(cooldown, history, clock, make_rng):
    wins = [o for o in CATALOG if o.category == WIN]
    losses = [o for o in CATALOG if o.category == LOSE]

    svc = make_service(cooldown, history, clock, make_rng(values=[0.39, 0.0]))
    assert svc.draw() == wins[0]

    svc = make_service(cooldown, history, clock, make_rng(values=[0.41, 0.0]))
    assert svc.draw() == losses[0]

    svc = make_service(cooldown, history, clock, make_rng(values=[0.4, 0.999]))
    assert svc.draw() == losses[-1]


def test_draw_subselection_is_uniform_over_subset(cooldown, history, clock, make_rng):
    wins = [o for o in CATALOG if o.category == WIN]
    picks = []
    for i in range(len(wins)):
        svc = make_service(cooldown, history, clock, make_rng(values=[0.1, i / len(wins)]))
        picks.append(svc.draw())
    assert picks == wins


def test_draw_categories_over_many_trials(cooldown, history, clock, make_rng):
    values = []
    for i in range(10000):
        values.extend([i / 10000, 0.5])
    svc = make_service(cooldown, history, clock, make_rng(values=values))
    results = [svc.draw() for _ in range(10000)]
    wins = sum(1 for o in results if o.category == WIN)
    assert wins == 4000
    for i, offer in enumerate(results):
        assert offer.category == (WIN if i / 10000 < 0.4 else LOSE)


def test_catalog_requires_both_categories(cooldown, history, clock, make_rng):
    only_wins = (Offer(1, "a", "b", WIN, "x"),)
    with pytest.raises(ValueError):
        make_service(cooldown, history, clock, make_rng(), catalog=only_wins)


def test_award_succeeds_once_then_cooldown(cooldown, history, clock, make_rng, store, audit):
    svc = make_service(cooldown, history, clock, make_rng(values=[0.1, 0.0, 0.1, 0.0]), audit=audit)
    assert cooldown.is_eligible("a@b.com")

    result = svc.award("a@b.com")
    assert result.entry.contact == "a@b.com"
    assert result.entry.consumed is False
    assert result.entry.timestamp == clock()
    assert result.entry.next_eligible_at == datetime(2026, 3, 2, 13, 5, tzinfo=timezone.utc)
    assert result.unique_id == f"a@b.com-{int(clock().timestamp() * 1000)}-{result.entry.id}"
    assert result.display_id == result.unique_id[-12:]
    assert result.cooldown.display == "24h 0m 0s"
    assert store.get(REGISTRY_KEY) == ["a@b.com"]
    assert audit.entries[-1][0] == "offer_awarded"

    with pytest.raises(CooldownActive) as exc:
        svc.award("a@b.com")
    assert exc.value.existing_offer["uniqueId"] == result.unique_id
    assert len(history.entries("a@b.com")) == 1


def test_award_allowed_again_next_day(cooldown, history, clock, make_rng):
    svc = make_service(cooldown, history, clock, make_rng(values=[0.9, 0.0] * 2))
    svc.award("a@b.com")
    clock.advance(days=1)
    svc.award("a@b.com")
    assert len(history.entries("a@b.com")) == 2
    assert history.contacts() == ["a@b.com"]


def test_award_requires_contact(cooldown, history, clock, make_rng):
    svc = make_service(cooldown, history, clock, make_rng())
    with pytest.raises(InvalidInput):
        svc.award("  ")


def test_award_requires_verified_contact_when_wired(cooldown, history, clock, make_rng, store):
    verification = VerificationService(store=store, sender=None)
    svc = make_service(cooldown, history, clock, make_rng(values=[0.1, 0.0]), verification=verification)

    with pytest.raises(InvalidInput):
        svc.award("a@b.com")

    store.set_with_expiry(verified_key("a@b.com"), 600, "1")
    svc.award("a@b.com")
    assert not verification.is_verified("a@b.com")
