"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from oik_scheduler.config import settings
from oik_scheduler.domain.installments import build_installment_group
from oik_scheduler.domain.models import (
    AccountingRegime,
    Amount,
    AmountKnown,
    CreditCardAccount,
    CycleStatus,
    DateField,
    Direction,
    DueSource,
    DueStatus,
    EntryKind,
    InstallmentGroup,
    LedgerEntry,
    ObligationType,
    RecurringObligation,
    SubcategoryAmount,
    ValidationKind,
)


class AmountSchema(BaseModel):
    """Tagged amount: 'pending' means not computed yet, never zero"""

    status: Literal["known", "pending"]
    amount_cents: Optional[int] = None

    @classmethod
    def from_domain(cls, amount: Amount) -> "AmountSchema":
        if isinstance(amount, AmountKnown):
            return cls(status="known", amount_cents=amount.amount_cents)
        return cls(status="pending")


class RecurringObligationSchema(BaseModel):
    id: str
    family_id: str
    direction: Direction
    amount_cents: int
    # Left unconstrained: out-of-range days are skipped, not rejected
    day_of_month: Optional[int] = None
    start_date: date
    end_date: Optional[date] = None
    is_active: bool = True
    description: str = ""
    obligation_type: ObligationType = ObligationType.FIXED
    category_id: Optional[str] = None
    linked_account_id: Optional[str] = None
    linked_card_id: Optional[str] = None

    def to_domain(self) -> RecurringObligation:
        return RecurringObligation(**self.model_dump())


class CreditCardSchema(BaseModel):
    id: str
    closing_day: Optional[int] = None
    due_day: Optional[int] = None
    card_name: str = ""
    credit_limit_cents: Optional[int] = None
    is_active: bool = True

    def to_domain(self) -> CreditCardAccount:
        return CreditCardAccount(**self.model_dump())


class UpcomingRequest(BaseModel):
    """Request body for POST /v1/upcoming"""

    family_id: str = Field(..., min_length=1)
    reference_date: date
    days_ahead: Optional[int] = Field(None, ge=0, description="Defaults to the configured window")
    recurring_obligations: List[RecurringObligationSchema] = Field(default_factory=list)
    credit_cards: List[CreditCardSchema] = Field(default_factory=list)


class UpcomingDueSchema(BaseModel):
    id: str
    name: str
    obligation_type: ObligationType
    amount: AmountSchema
    due_date: date
    days_until_due: int
    status: DueStatus
    source: DueSource
    source_id: str
    category_id: Optional[str] = None
    linked_account_id: Optional[str] = None
    linked_card_id: Optional[str] = None


class UpcomingResponse(BaseModel):
    family_id: str
    reference_date: date
    days_ahead: int
    items: List[UpcomingDueSchema]


class CardClosingsRequest(BaseModel):
    reference_date: date
    credit_cards: List[CreditCardSchema]


class CardClosingSchema(BaseModel):
    card_id: str
    card_name: str
    closing_date: date
    due_date: date
    days_until_closing: int
    days_until_due: int
    status: CycleStatus
    estimated_amount: AmountSchema


class InstallmentPlanRequest(BaseModel):
    """Request body for POST /v1/installments; range checks happen in the domain"""

    total_amount_cents: int
    installments_total: int
    first_due_date: date


class InstallmentSchema(BaseModel):
    number: int
    due_date: date
    amount_cents: int


class InstallmentPlanResponse(BaseModel):
    total_amount_cents: int
    installments_total: int
    installment_value_cents: int
    installments: List[InstallmentSchema]


class InstallmentGroupSchema(BaseModel):
    id: str
    total_amount_cents: int = Field(..., gt=0)
    installments_total: int = Field(..., ge=2, le=48)
    first_due_date: date
    current_installment: int = Field(1, ge=1)
    description: str = ""
    category_id: Optional[str] = None
    is_active: bool = True

    def to_domain(self) -> InstallmentGroup:
        group = build_installment_group(
            group_id=self.id,
            total_amount_cents=self.total_amount_cents,
            installments_total=self.installments_total,
            first_due_date=self.first_due_date,
            description=self.description,
            category_id=self.category_id,
        )
        group.current_installment = self.current_installment
        group.is_active = self.is_active
        return group


class FutureInstallmentsRequest(BaseModel):
    reference_date: date
    months: Optional[int] = Field(None, ge=1)
    groups: List[InstallmentGroupSchema]


class FuturePaymentSchema(BaseModel):
    group_id: str
    number: int
    due_date: date
    amount_cents: int
    description: str
    label: str
    category_id: Optional[str] = None


class SubcategoryAmountSchema(BaseModel):
    id: str
    amount_cents: int
    name: str = ""

    def to_domain(self) -> SubcategoryAmount:
        return SubcategoryAmount(id=self.id, amount_cents=self.amount_cents, name=self.name)


class ValidateBudgetRequest(BaseModel):
    category_total_cents: int
    subcategories: List[SubcategoryAmountSchema]


class ValidationResultSchema(BaseModel):
    is_valid: bool
    difference_cents: int
    kind: ValidationKind
    message: str


class RedistributeRequest(BaseModel):
    new_category_total_cents: int = Field(..., ge=0)
    subcategories: List[SubcategoryAmountSchema]


class IfAdjustmentRequest(BaseModel):
    category_total_cents: int
    new_subcategory_total_cents: int
    current_if_percentage: float
    monthly_income_cents: int


class IfAdjustmentSchema(BaseModel):
    new_category_total_cents: int
    new_if_percentage: float
    requires_confirmation: bool
    message: Optional[str] = None


class RegimeResponse(BaseModel):
    regime: AccountingRegime
    date_field: DateField
    card_purchase_included: bool
    invoice_payment_included: bool
    summary: str


class LedgerEntrySchema(BaseModel):
    id: str
    amount_cents: int
    event_date: date
    cash_date: Optional[date] = None
    kind: EntryKind = EntryKind.REGULAR

    def to_domain(self) -> LedgerEntry:
        return LedgerEntry(**self.model_dump())


class ActualsRequest(BaseModel):
    """Request body for POST /v1/actuals; regime falls back to the configured default"""

    regime: AccountingRegime = Field(default_factory=lambda: settings.default_accounting_regime)
    period_start: date
    period_end: date
    entries: List[LedgerEntrySchema]


class ActualsResponse(BaseModel):
    regime: AccountingRegime
    date_field: DateField
    total_cents: int


class InvalidateRequest(BaseModel):
    tags: List[str] = Field(..., min_length=1)


class InvalidateResponse(BaseModel):
    evicted: int
