"""Subcategory budget reconciliation against category totals"""

from decimal import Decimal, ROUND_HALF_UP
from typing import List

from oik_scheduler.domain.models import (
    IfAdjustment,
    IncreaseCheck,
    SubcategoryAmount,
    ValidationKind,
    ValidationResult,
)

# Rounding slack allowed between category total and subcategory sum
TOLERANCE_CENTS = 1


def format_cents(amount_cents: int) -> str:
    """R$ 1234.56 style amount for user-facing messages"""
    sign = "-" if amount_cents < 0 else ""
    return f"{sign}R$ {abs(amount_cents) // 100}.{abs(amount_cents) % 100:02d}"


def validate_subcategory_sum(
    category_total_cents: int,
    subcategories: List[SubcategoryAmount],
) -> ValidationResult:
    """
    Check that subcategory amounts add up to the category total.

    difference = sum(subcategories) - category total, within ±1 cent is ok.
    Mismatches are results, not errors: the user is expected to fix them.
    """
    difference = sum(s.amount_cents for s in subcategories) - category_total_cents

    if abs(difference) <= TOLERANCE_CENTS:
        return ValidationResult(
            is_valid=True,
            difference_cents=difference,
            kind=ValidationKind.OK,
            message="Subcategories match the category total",
        )

    if difference > 0:
        return ValidationResult(
            is_valid=False,
            difference_cents=difference,
            kind=ValidationKind.OVER,
            message=f"Subcategories exceed the category total by {format_cents(difference)}",
        )

    return ValidationResult(
        is_valid=False,
        difference_cents=difference,
        kind=ValidationKind.UNDER,
        message=f"{format_cents(-difference)} not distributed among subcategories",
    )


def redistribute_proportional(
    subcategories: List[SubcategoryAmount],
    new_category_total_cents: int,
) -> List[SubcategoryAmount]:
    """
    Rescale subcategory amounts to a new category total, keeping input order.

    - Current sum zero: even split, remainder on the first element
    - Otherwise: scale by new_total / current_sum, round half-up per element,
      last element takes whatever is left so the sum is exact

    Rounding the leading elements up can leave the last one negative:
    [1, 1, 1, 1] → 2 gives [1, 1, 1, -1]. Only the sum is guaranteed.

    Example:
        [400, 600] → 500 gives [200, 300]
    """
    if not subcategories:
        return []

    current_total = sum(s.amount_cents for s in subcategories)

    if current_total == 0:
        amount_each = new_category_total_cents // len(subcategories)
        remainder = new_category_total_cents - amount_each * len(subcategories)
        return [
            SubcategoryAmount(
                id=s.id,
                name=s.name,
                amount_cents=amount_each + (remainder if i == 0 else 0),
            )
            for i, s in enumerate(subcategories)
        ]

    factor = Decimal(new_category_total_cents) / Decimal(current_total)
    distributed = 0
    result = []
    for i, s in enumerate(subcategories):
        if i == len(subcategories) - 1:
            new_amount = new_category_total_cents - distributed
        else:
            new_amount = int((Decimal(s.amount_cents) * factor).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

        distributed += new_amount
        result.append(SubcategoryAmount(id=s.id, name=s.name, amount_cents=new_amount))

    return result


def calculate_if_adjustment(
    category_total_cents: int,
    new_subcategory_total_cents: int,
    current_if_percentage: float,
    monthly_income_cents: int,
) -> IfAdjustment:
    """
    Finance a subcategory increase from the discretionary margin (IF).

    The increase is converted to a percentage of monthly income and taken
    from the IF. A margin that would go negative is rejected with totals
    unchanged; otherwise the new total is proposed for confirmation.

    Example:
        total 1000, new 1200, IF 1%, income 10000
        → increase is 2% of income, IF would be -1% → rejected
    """
    increase = new_subcategory_total_cents - category_total_cents

    if increase <= 0:
        return IfAdjustment(
            new_category_total_cents=category_total_cents,
            new_if_percentage=current_if_percentage,
            requires_confirmation=False,
        )

    if monthly_income_cents <= 0:
        return IfAdjustment(
            new_category_total_cents=category_total_cents,
            new_if_percentage=current_if_percentage,
            requires_confirmation=True,
            message="No monthly income registered. Set your income before increasing categories.",
        )

    increase_as_percentage = increase / monthly_income_cents * 100
    new_if_percentage = current_if_percentage - increase_as_percentage

    if new_if_percentage < 0:
        return IfAdjustment(
            new_category_total_cents=category_total_cents,
            new_if_percentage=current_if_percentage,
            requires_confirmation=True,
            message="Insufficient IF. Reduce subcategory values or other categories.",
        )

    return IfAdjustment(
        new_category_total_cents=new_subcategory_total_cents,
        new_if_percentage=new_if_percentage,
        requires_confirmation=True,
        message=f"This will consume {format_cents(increase)} of the IF. Confirm?",
    )


def can_increase_category_amount(current_if_amount_cents: int, increase_cents: int) -> IncreaseCheck:
    """Whether a category can grow by increase_cents given the IF left"""
    if current_if_amount_cents <= 0:
        return IncreaseCheck(
            allowed=False,
            message="To increase expenses, reduce other categories or increase your income.",
        )

    if increase_cents > current_if_amount_cents:
        return IncreaseCheck(
            allowed=False,
            message=(
                f"Maximum increase available: {format_cents(current_if_amount_cents)}. "
                "Reduce other categories to free up more."
            ),
        )

    return IncreaseCheck(allowed=True)
