"""Upcoming dues projection over a family's recurring obligations and cards"""

from datetime import date, timedelta
from typing import List

from oik_scheduler.domain.billing_cycle import is_valid_day
from oik_scheduler.domain.models import (
    AmountKnown,
    AmountPending,
    CreditCardAccount,
    Direction,
    DueSource,
    ObligationType,
    RecurringObligation,
    UpcomingDue,
)
from oik_scheduler.domain.urgency import classify_urgency
from oik_scheduler.utils.date_utils import days_between, next_occurrence


def is_projectable(obligation: RecurringObligation) -> bool:
    """Active expense with a usable day-of-month"""
    return (
        obligation.is_active
        and obligation.direction == Direction.EXPENSE
        and is_valid_day(obligation.day_of_month)
    )


def is_projectable_card(card: CreditCardAccount) -> bool:
    return card.is_active and is_valid_day(card.due_day)


def build_upcoming(
    days_ahead: int,
    recurring_obligations: List[RecurringObligation],
    credit_cards: List[CreditCardAccount],
    reference_date: date,
) -> List[UpcomingDue]:
    """
    Project the next due date of every obligation and card within a window.

    Flow:
    1. Next occurrence of each active expense's day_of_month, kept when it is
       no later than reference_date + days_ahead and inside the obligation's
       start/end dates
    2. Same for each active card's due_day; the invoice amount is pending
    3. Classify urgency and sort by (days_until_due, source_id, source)

    Records with a missing or invalid day are left out rather than errored.
    """
    window_end = reference_date + timedelta(days=days_ahead)
    upcoming = []

    for obligation in recurring_obligations:
        if not is_projectable(obligation):
            continue

        due_date = next_occurrence(obligation.day_of_month, reference_date)
        if due_date > window_end:
            continue
        if due_date < obligation.start_date:
            continue
        if obligation.end_date is not None and due_date > obligation.end_date:
            continue

        days_until_due = days_between(reference_date, due_date)
        upcoming.append(
            UpcomingDue(
                id=f"recurring-{obligation.id}",
                name=obligation.description or "Recurring expense",
                obligation_type=obligation.obligation_type,
                amount=AmountKnown(obligation.amount_cents),
                due_date=due_date,
                days_until_due=days_until_due,
                status=classify_urgency(days_until_due),
                source=DueSource.RECURRING,
                source_id=obligation.id,
                category_id=obligation.category_id,
                linked_account_id=obligation.linked_account_id,
                linked_card_id=obligation.linked_card_id,
            )
        )

    for card in credit_cards:
        if not is_projectable_card(card):
            continue

        due_date = next_occurrence(card.due_day, reference_date)
        if due_date > window_end:
            continue

        days_until_due = days_between(reference_date, due_date)
        upcoming.append(
            UpcomingDue(
                id=f"card-{card.id}",
                name=f"{card.card_name} invoice" if card.card_name else "Card invoice",
                obligation_type=ObligationType.CREDIT_CARD,
                amount=AmountPending(),
                due_date=due_date,
                days_until_due=days_until_due,
                status=classify_urgency(days_until_due),
                source=DueSource.CREDIT_CARD,
                source_id=card.id,
                linked_card_id=card.id,
            )
        )

    return sorted(upcoming, key=lambda u: (u.days_until_due, u.source_id, u.source.value))
