"""Installment schedule generation for financed purchases"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from oik_scheduler.domain.exceptions import InvalidInstallmentInput
from oik_scheduler.domain.models import FuturePayment, Installment, InstallmentGroup
from oik_scheduler.utils.date_utils import add_months

MIN_INSTALLMENTS = 2
MAX_INSTALLMENTS = 48


def generate_installment_plan(
    total_amount_cents: int,
    installments_total: int,
    first_due_date: date,
) -> List[Installment]:
    """
    Split a purchase into monthly installments that sum exactly to the total.

    Requirements:
    - 2 to 48 installments, positive total
    - Base value is total / count rounded half-up to the cent
    - Last installment absorbs the rounding remainder (positive or negative)
    - Due dates are first_due_date + k calendar months, day clamped to month length

    Raises:
        InvalidInstallmentInput: on a non-positive total or out-of-range count

    Example:
        R$1000.00 in 3 → [333.33, 333.33, 333.34]
        R$2.00 in 3    → [0.67, 0.67, 0.66]  (remainder -1 cent)
    """
    if isinstance(installments_total, bool) or not isinstance(installments_total, int):
        raise InvalidInstallmentInput(
            total_amount_cents, installments_total, "Installment count must be an integer"
        )
    if not MIN_INSTALLMENTS <= installments_total <= MAX_INSTALLMENTS:
        raise InvalidInstallmentInput(
            total_amount_cents,
            installments_total,
            f"Installment count must be between {MIN_INSTALLMENTS} and {MAX_INSTALLMENTS}",
        )
    if total_amount_cents <= 0:
        raise InvalidInstallmentInput(
            total_amount_cents, installments_total, "Total amount must be positive"
        )

    base_amount = installment_value(total_amount_cents, installments_total)
    remainder = total_amount_cents - base_amount * installments_total

    installments = []
    for i in range(installments_total):
        # Always offset from the first date so Jan 31 does not drift to the 28th
        due_date = add_months(first_due_date, i)

        # Last installment absorbs remainder to ensure exact total
        amount = base_amount + (remainder if i == installments_total - 1 else 0)

        installments.append(Installment(number=i + 1, due_date=due_date, amount_cents=amount))

    return installments


def installment_value(total_amount_cents: int, installments_total: int) -> int:
    """Per-installment value rounded half-up to the cent"""
    share = Decimal(total_amount_cents) / Decimal(installments_total)
    return int(share.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def build_installment_group(
    group_id: str,
    total_amount_cents: int,
    installments_total: int,
    first_due_date: date,
    parent_transaction_id: Optional[str] = None,
    description: str = "",
    category_id: Optional[str] = None,
    credit_card_id: Optional[str] = None,
) -> InstallmentGroup:
    """Amortize a purchase and wrap the schedule for the caller to persist"""
    installments = generate_installment_plan(total_amount_cents, installments_total, first_due_date)

    return InstallmentGroup(
        id=group_id,
        total_amount_cents=total_amount_cents,
        installments_total=installments_total,
        installment_value_cents=installment_value(total_amount_cents, installments_total),
        first_due_date=first_due_date,
        parent_transaction_id=parent_transaction_id,
        installments=installments,
        description=description,
        category_id=category_id,
        credit_card_id=credit_card_id,
    )


def project_future_installments(
    groups: List[InstallmentGroup],
    reference_date: date,
    months: int = 3,
) -> List[FuturePayment]:
    """
    Upcoming installment payments for cash-flow projection.

    For each active group, walks from current_installment onward and keeps at
    most `months` payments, dropping those already due before reference_date.
    Amounts come from the exact schedule, so the final installment carries
    its rounding remainder.
    """
    payments = []
    for group in groups:
        if not group.is_active:
            continue

        schedule = group.installments or generate_installment_plan(
            group.total_amount_cents, group.installments_total, group.first_due_date
        )
        remaining = schedule[group.current_installment - 1:]

        for inst in remaining[:months]:
            if inst.due_date < reference_date:
                continue
            payments.append(
                FuturePayment(
                    group_id=group.id,
                    number=inst.number,
                    due_date=inst.due_date,
                    amount_cents=inst.amount_cents,
                    description=group.description,
                    label=f"{inst.number}/{group.installments_total}",
                    category_id=group.category_id,
                )
            )

    return sorted(payments, key=lambda p: (p.due_date, p.group_id, p.number))
