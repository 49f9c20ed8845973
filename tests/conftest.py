"""Pytest fixtures for testing"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from oik_scheduler.api.dependencies import get_projection_cache
from oik_scheduler.api.main import create_app
from oik_scheduler.domain.models import (
    CreditCardAccount,
    Direction,
    ObligationType,
    RecurringObligation,
)
from oik_scheduler.infrastructure.cache import InMemoryProjectionCache

# Tuesday; every test passes dates explicitly, nothing reads the clock
REFERENCE_DATE = date(2026, 3, 10)


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def projection_cache() -> InMemoryProjectionCache:
    return InMemoryProjectionCache()


@pytest.fixture
def client(projection_cache: InMemoryProjectionCache) -> TestClient:
    """Create FastAPI test client with an isolated projection cache"""
    app = create_app()
    app.dependency_overrides[get_projection_cache] = lambda: projection_cache
    return TestClient(app)


def make_obligation(obligation_id: str, day_of_month, **overrides) -> RecurringObligation:
    fields = dict(
        id=obligation_id,
        family_id="family_1",
        direction=Direction.EXPENSE,
        amount_cents=10000,
        day_of_month=day_of_month,
        start_date=date(2025, 1, 1),
        description=obligation_id.replace("_", " ").title(),
    )
    fields.update(overrides)
    return RecurringObligation(**fields)


@pytest.fixture
def sample_obligations() -> list[RecurringObligation]:
    """A family's recurring rows as fetched by the caller (reference: 2026-03-10)"""
    return [
        make_obligation("rent", 10, amount_cents=250000),  # due today
        make_obligation("internet", 12, amount_cents=12990),  # in 2 days
        make_obligation("gym", 5, amount_cents=8990),  # Apr 5, in 26 days
        make_obligation(
            "car_loan", 20, amount_cents=95000, obligation_type=ObligationType.FINANCING
        ),  # in 10 days
        make_obligation("salary", 15, direction=Direction.INCOME, amount_cents=800000),
        make_obligation("old_insurance", 18, is_active=False),
        make_obligation("no_day", None),
        make_obligation("day_zero", 0),
        make_obligation("day_thirty_two", 32),
        make_obligation("ended", 20, end_date=date(2026, 3, 1)),
        make_obligation("not_started", 25, start_date=date(2026, 4, 1)),
    ]


@pytest.fixture
def sample_cards() -> list[CreditCardAccount]:
    return [
        CreditCardAccount(id="card_gold", closing_day=5, due_day=12, card_name="Gold"),
        CreditCardAccount(id="card_blue", closing_day=1, due_day=9, card_name="Blue"),  # Apr 9, in 30 days
        CreditCardAccount(id="card_no_due", closing_day=3, due_day=None, card_name="Broken"),
        CreditCardAccount(id="card_closed", closing_day=3, due_day=11, is_active=False),
    ]
