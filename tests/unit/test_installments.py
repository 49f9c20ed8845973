"""Unit tests for installment schedule generation"""

from datetime import date

import pytest

from oik_scheduler.domain.exceptions import InvalidInstallmentInput
from oik_scheduler.domain.installments import (
    build_installment_group,
    generate_installment_plan,
    installment_value,
    project_future_installments,
)


def test_generate_installment_plan_equal_split():
    """Test plan with evenly divisible amount"""
    installments = generate_installment_plan(120000, 12, date(2026, 4, 10))

    assert len(installments) == 12
    assert all(inst.amount_cents == 10000 for inst in installments)
    assert sum(inst.amount_cents for inst in installments) == 120000


def test_generate_installment_plan_last_absorbs_positive_remainder():
    """R$1000.00 in 3 → 333.33, 333.33, 333.34"""
    installments = generate_installment_plan(100000, 3, date(2026, 4, 10))

    assert [i.amount_cents for i in installments] == [33333, 33333, 33334]
    assert sum(i.amount_cents for i in installments) == 100000


def test_generate_installment_plan_last_absorbs_negative_remainder():
    """R$2.00 in 3: base rounds up to 0.67, last gives back a cent"""
    installments = generate_installment_plan(200, 3, date(2026, 4, 10))

    assert [i.amount_cents for i in installments] == [67, 67, 66]
    assert sum(i.amount_cents for i in installments) == 200


@pytest.mark.parametrize("total", [1, 99, 100000, 123457, 999999, 4999999])
def test_generate_installment_plan_exact_sum(total):
    """Sum equals the total to the cent for every allowed count"""
    for count in range(2, 49):
        installments = generate_installment_plan(total, count, date(2026, 1, 31))
        assert len(installments) == count
        assert sum(i.amount_cents for i in installments) == total


def test_generate_installment_plan_monthly_dates_without_drift():
    """Due dates advance by calendar month and clamp, always from the first date"""
    installments = generate_installment_plan(40000, 4, date(2026, 1, 31))

    assert [i.due_date for i in installments] == [
        date(2026, 1, 31),
        date(2026, 2, 28),
        date(2026, 3, 31),
        date(2026, 4, 30),
    ]
    assert [i.number for i in installments] == [1, 2, 3, 4]


def test_generate_installment_plan_leap_february():
    installments = generate_installment_plan(30000, 2, date(2028, 1, 30))
    assert installments[1].due_date == date(2028, 2, 29)


def test_generate_installment_plan_crosses_year():
    installments = generate_installment_plan(30000, 3, date(2026, 11, 15))
    assert installments[-1].due_date == date(2027, 1, 15)


@pytest.mark.parametrize(
    "total, count",
    [
        (100000, 1),
        (100000, 49),
        (100000, 0),
        (0, 3),
        (-500, 3),
        (100000, 2.5),
        (100000, True),
    ],
)
def test_generate_installment_plan_invalid_input(total, count):
    """Invalid input raises; no partial schedule"""
    with pytest.raises(InvalidInstallmentInput) as exc_info:
        generate_installment_plan(total, count, date(2026, 4, 10))

    assert exc_info.value.total_amount_cents == total
    assert exc_info.value.installments_total == count


def test_installment_value_rounds_half_up():
    assert installment_value(100000, 3) == 33333
    assert installment_value(200, 3) == 67
    assert installment_value(5, 2) == 3  # 2.5 cents → 3


def test_build_installment_group():
    group = build_installment_group(
        group_id="grp_1",
        total_amount_cents=100000,
        installments_total=3,
        first_due_date=date(2026, 4, 10),
        parent_transaction_id="tx_1",
        description="Sofa",
    )

    assert group.installment_value_cents == 33333
    assert group.parent_transaction_id == "tx_1"
    assert len(group.installments) == 3
    assert sum(i.amount_cents for i in group.installments) == 100000


def test_project_future_installments_from_current_installment():
    group = build_installment_group("grp_1", 120000, 12, date(2026, 1, 10), description="TV")
    group.current_installment = 3

    payments = project_future_installments([group], date(2026, 3, 1), months=3)

    assert [p.due_date for p in payments] == [date(2026, 3, 10), date(2026, 4, 10), date(2026, 5, 10)]
    assert [p.label for p in payments] == ["3/12", "4/12", "5/12"]
    assert all(p.amount_cents == 10000 and p.description == "TV" for p in payments)


def test_project_future_installments_drops_past_due():
    group = build_installment_group("grp_1", 120000, 12, date(2026, 1, 10))
    group.current_installment = 3

    payments = project_future_installments([group], date(2026, 3, 15), months=3)

    assert [p.label for p in payments] == ["4/12", "5/12"]


def test_project_future_installments_last_carries_remainder():
    group = build_installment_group("grp_1", 100000, 3, date(2026, 1, 10))
    group.current_installment = 3

    payments = project_future_installments([group], date(2026, 1, 1))

    assert len(payments) == 1
    assert payments[0].label == "3/3"
    assert payments[0].amount_cents == 33334


def test_project_future_installments_sorted_and_skips_inactive():
    late = build_installment_group("grp_b", 20000, 2, date(2026, 4, 20))
    early = build_installment_group("grp_a", 20000, 2, date(2026, 4, 5))
    inactive = build_installment_group("grp_c", 20000, 2, date(2026, 4, 1))
    inactive.is_active = False

    payments = project_future_installments([late, early, inactive], date(2026, 4, 1), months=1)

    assert [(p.group_id, p.due_date) for p in payments] == [
        ("grp_a", date(2026, 4, 5)),
        ("grp_b", date(2026, 4, 20)),
    ]
