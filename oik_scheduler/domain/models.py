"""Domain models - pure Python dataclasses representing scheduling entities"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union


class Direction(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class ObligationType(str, Enum):
    FIXED = "fixed"
    CREDIT_CARD = "credit_card"
    FINANCING = "financing"


class DueStatus(str, Enum):
    """Urgency of a due date, derived only from days until due"""

    OVERDUE = "overdue"
    URGENT = "urgent"
    ATTENTION = "attention"
    OK = "ok"


class CycleStatus(str, Enum):
    """Where a card sits in its statement period"""

    CLOSING_SOON = "closing_soon"  # still accumulating charges
    CLOSED = "closed"  # statement amount fixed
    DUE_SOON = "due_soon"  # statement closed, payment within 3 days


class DueSource(str, Enum):
    RECURRING = "recurring"
    CREDIT_CARD = "credit_card"


class AccountingRegime(str, Enum):
    CASH_BASIS = "cash_basis"
    ACCRUAL_BASIS = "accrual_basis"


class DateField(str, Enum):
    """Attribute name on LedgerEntry that governs budget dating"""

    CASH_DATE = "cash_date"
    EVENT_DATE = "event_date"


class EntryKind(str, Enum):
    REGULAR = "regular"
    CARD_PURCHASE = "card_purchase"
    INVOICE_PAYMENT = "invoice_payment"


class ValidationKind(str, Enum):
    OK = "ok"
    UNDER = "under"
    OVER = "over"


@dataclass(frozen=True)
class AmountKnown:
    """Amount that has been computed"""

    amount_cents: int


@dataclass(frozen=True)
class AmountPending:
    """Amount not known yet (e.g. a card invoice still open); not the same as zero"""


Amount = Union[AmountKnown, AmountPending]


@dataclass
class RecurringObligation:
    """Recurring bill or income expected on a day of the month"""

    id: str
    family_id: str
    direction: Direction
    amount_cents: int
    day_of_month: Optional[int]
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    description: str = ""
    obligation_type: ObligationType = ObligationType.FIXED
    category_id: Optional[str] = None
    linked_account_id: Optional[str] = None
    linked_card_id: Optional[str] = None


@dataclass
class CreditCardAccount:
    id: str
    closing_day: Optional[int]
    due_day: Optional[int]
    card_name: str = ""
    credit_limit_cents: Optional[int] = None
    is_active: bool = True


@dataclass
class Installment:
    """Single payment in an installment schedule"""

    number: int  # 1-based
    due_date: date
    amount_cents: int


@dataclass
class InstallmentGroup:
    """A financed purchase split into monthly installments"""

    id: str
    total_amount_cents: int
    installments_total: int
    installment_value_cents: int
    first_due_date: date
    parent_transaction_id: Optional[str]
    installments: List[Installment] = field(default_factory=list)
    current_installment: int = 1
    description: str = ""
    category_id: Optional[str] = None
    credit_card_id: Optional[str] = None
    is_active: bool = True


@dataclass
class FuturePayment:
    """Upcoming installment payment used in cash-flow projection"""

    group_id: str
    number: int
    due_date: date
    amount_cents: int
    description: str
    label: str  # e.g. "3/12"
    category_id: Optional[str] = None


@dataclass
class UpcomingDue:
    """Projected due item; recomputed on every call, never persisted"""

    id: str
    name: str
    obligation_type: ObligationType
    amount: Amount
    due_date: date
    days_until_due: int
    status: DueStatus
    source: DueSource
    source_id: str
    category_id: Optional[str] = None
    linked_account_id: Optional[str] = None
    linked_card_id: Optional[str] = None


@dataclass
class BillingCycle:
    closing_date: date
    due_date: date
    days_until_closing: int
    days_until_due: int
    status: CycleStatus


@dataclass
class CardClosing:
    card_id: str
    card_name: str
    closing_date: date
    due_date: date
    days_until_closing: int
    days_until_due: int
    status: CycleStatus
    estimated_amount: Amount = field(default_factory=AmountPending)


@dataclass
class LedgerEntry:
    """Transaction as seen by budget aggregation"""

    id: str
    amount_cents: int
    event_date: date
    cash_date: Optional[date] = None  # None until money actually moves (e.g. uncleared cheque)
    kind: EntryKind = EntryKind.REGULAR


@dataclass
class SubcategoryAmount:
    id: str
    amount_cents: int
    name: str = ""


@dataclass
class ValidationResult:
    is_valid: bool
    difference_cents: int  # sum(subcategories) - category total
    kind: ValidationKind
    message: str


@dataclass
class IfAdjustment:
    """Outcome of financing a category increase from the discretionary margin (IF)"""

    new_category_total_cents: int
    new_if_percentage: float
    requires_confirmation: bool
    message: Optional[str] = None


@dataclass
class IncreaseCheck:
    allowed: bool
    message: Optional[str] = None
