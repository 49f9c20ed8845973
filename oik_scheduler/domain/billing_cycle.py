"""Credit card statement period resolution"""

from datetime import date
from typing import List

from oik_scheduler.domain.models import BillingCycle, CardClosing, CreditCardAccount, CycleStatus
from oik_scheduler.domain.urgency import ATTENTION_WINDOW_DAYS
from oik_scheduler.utils.date_utils import add_months, days_between, next_occurrence


def is_valid_day(day: object) -> bool:
    """True for an int day-of-month in 1..31 (bools excluded)"""
    return isinstance(day, int) and not isinstance(day, bool) and 1 <= day <= 31


def resolve_cycle(closing_day: int, due_day: int, reference_date: date) -> BillingCycle:
    """
    Resolve where a card is in its billing cycle.

    Status:
    - closing_soon: closing date not passed yet (charges still accumulating)
    - due_soon:     closing passed and payment due within 3 days
    - closed:       closing passed, payment further out

    When the next due date comes before the next closing date, the statement
    being paid already closed last month, so its closing date is moved back
    one month (clamped like any other day-of-month).

    Example (closing 5, due 15):
        reference Mar 3  -> closes Mar 5, closing_soon
        reference Mar 10 -> closed Mar 5, due Mar 15, closed
        reference Mar 13 -> closed Mar 5, due Mar 15, due_soon
    """
    closing_date = next_occurrence(closing_day, reference_date)
    due_date = next_occurrence(due_day, reference_date)
    if due_date < closing_date:
        closing_date = add_months(closing_date.replace(day=1), -1, day=closing_day)
    return cycle_from_dates(closing_date, due_date, reference_date)


def cycle_from_dates(closing_date: date, due_date: date, reference_date: date) -> BillingCycle:
    """Classify a statement given its concrete closing and due dates"""
    days_until_closing = days_between(reference_date, closing_date)
    days_until_due = days_between(reference_date, due_date)

    if days_until_closing >= 0:
        status = CycleStatus.CLOSING_SOON
    elif days_until_due <= ATTENTION_WINDOW_DAYS:
        status = CycleStatus.DUE_SOON
    else:
        status = CycleStatus.CLOSED

    return BillingCycle(
        closing_date=closing_date,
        due_date=due_date,
        days_until_closing=days_until_closing,
        days_until_due=days_until_due,
        status=status,
    )


def build_card_closings(cards: List[CreditCardAccount], reference_date: date) -> List[CardClosing]:
    """
    Statement status for each active card.

    Cards missing a valid closing or due day are skipped; that is incomplete
    configuration, not a failure. Estimated amounts are always pending since
    invoice totals depend on transactions outside this engine.
    """
    closings = []
    for card in cards:
        if not card.is_active:
            continue
        if not (is_valid_day(card.closing_day) and is_valid_day(card.due_day)):
            continue

        cycle = resolve_cycle(card.closing_day, card.due_day, reference_date)
        closings.append(
            CardClosing(
                card_id=card.id,
                card_name=card.card_name,
                closing_date=cycle.closing_date,
                due_date=cycle.due_date,
                days_until_closing=cycle.days_until_closing,
                days_until_due=cycle.days_until_due,
                status=cycle.status,
            )
        )

    return sorted(closings, key=lambda c: (c.closing_date, c.card_id))
