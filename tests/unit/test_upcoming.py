"""Unit tests for the upcoming dues projection"""

from datetime import date

from oik_scheduler.domain.models import (
    AmountKnown,
    AmountPending,
    CreditCardAccount,
    Direction,
    DueSource,
    DueStatus,
    ObligationType,
    RecurringObligation,
)
from oik_scheduler.domain.upcoming import build_upcoming


def test_build_upcoming_sorted_projection(sample_obligations, sample_cards, reference_date):
    upcoming = build_upcoming(30, sample_obligations, sample_cards, reference_date)

    assert [(u.id, u.days_until_due) for u in upcoming] == [
        ("recurring-rent", 0),
        ("card-card_gold", 2),  # ties with internet, card_gold < internet
        ("recurring-internet", 2),
        ("recurring-car_loan", 10),
        ("recurring-gym", 26),
        ("card-card_blue", 30),
    ]


def test_build_upcoming_statuses(sample_obligations, sample_cards, reference_date):
    statuses = {u.source_id: u.status for u in build_upcoming(30, sample_obligations, sample_cards, reference_date)}

    assert statuses["rent"] == DueStatus.URGENT
    assert statuses["internet"] == DueStatus.ATTENTION
    assert statuses["card_gold"] == DueStatus.ATTENTION
    assert statuses["car_loan"] == DueStatus.OK


def test_build_upcoming_excludes_invalid_inactive_and_income(sample_obligations, sample_cards, reference_date):
    ids = {u.source_id for u in build_upcoming(30, sample_obligations, sample_cards, reference_date)}

    for excluded in [
        "salary",
        "old_insurance",
        "no_day",
        "day_zero",
        "day_thirty_two",
        "ended",
        "not_started",
        "card_no_due",
        "card_closed",
    ]:
        assert excluded not in ids


def test_build_upcoming_window(sample_obligations, sample_cards, reference_date):
    upcoming = build_upcoming(20, sample_obligations, sample_cards, reference_date)
    ids = [u.source_id for u in upcoming]

    assert "gym" not in ids  # Apr 5 is 26 days out
    assert "card_blue" not in ids
    assert ids[-1] == "car_loan"


def test_build_upcoming_zero_window_keeps_today_only(sample_obligations, sample_cards, reference_date):
    upcoming = build_upcoming(0, sample_obligations, sample_cards, reference_date)
    assert [u.source_id for u in upcoming] == ["rent"]


def test_build_upcoming_amounts_are_tagged(sample_obligations, sample_cards, reference_date):
    by_id = {u.source_id: u for u in build_upcoming(30, sample_obligations, sample_cards, reference_date)}

    assert by_id["rent"].amount == AmountKnown(250000)
    assert by_id["rent"].source == DueSource.RECURRING
    assert by_id["car_loan"].obligation_type == ObligationType.FINANCING

    card = by_id["card_gold"]
    assert isinstance(card.amount, AmountPending)
    assert card.amount != AmountKnown(0)
    assert card.source == DueSource.CREDIT_CARD
    assert card.obligation_type == ObligationType.CREDIT_CARD
    assert card.linked_card_id == "card_gold"
    assert card.name == "Gold invoice"


def test_build_upcoming_known_zero_amount_differs_from_pending(reference_date):
    obligation = RecurringObligation(
        id="free_trial",
        family_id="family_1",
        direction=Direction.EXPENSE,
        amount_cents=0,
        day_of_month=12,
        start_date=date(2026, 1, 1),
    )
    upcoming = build_upcoming(30, [obligation], [], reference_date)

    assert upcoming[0].amount == AmountKnown(0)
    assert not isinstance(upcoming[0].amount, AmountPending)


def test_build_upcoming_clamps_day_31_in_february():
    obligation = RecurringObligation(
        id="condo",
        family_id="family_1",
        direction=Direction.EXPENSE,
        amount_cents=70000,
        day_of_month=31,
        start_date=date(2025, 1, 1),
    )
    upcoming = build_upcoming(30, [obligation], [], date(2026, 2, 15))

    assert upcoming[0].due_date == date(2026, 2, 28)
    assert upcoming[0].days_until_due == 13


def test_build_upcoming_end_date_on_due_date_is_included(reference_date):
    obligation = RecurringObligation(
        id="last_payment",
        family_id="family_1",
        direction=Direction.EXPENSE,
        amount_cents=1000,
        day_of_month=15,
        start_date=date(2025, 1, 1),
        end_date=date(2026, 3, 15),
    )
    assert len(build_upcoming(30, [obligation], [], reference_date)) == 1


def test_build_upcoming_tie_break_is_deterministic(reference_date):
    cards = [
        CreditCardAccount(id="z_card", closing_day=1, due_day=12),
        CreditCardAccount(id="a_card", closing_day=1, due_day=12),
    ]
    first = build_upcoming(30, [], cards, reference_date)
    second = build_upcoming(30, [], list(reversed(cards)), reference_date)

    assert [u.source_id for u in first] == ["a_card", "z_card"]
    assert [u.source_id for u in second] == ["a_card", "z_card"]


def test_build_upcoming_empty():
    assert build_upcoming(30, [], [], date(2026, 3, 10)) == []
