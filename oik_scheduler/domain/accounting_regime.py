"""
Accounting regime resolution - the single place that decides which date governs a budget.

Cash basis counts an amount when money moves (cheque cleared, invoice paid).
Accrual basis counts it when the economic event happens (purchase date).

Card rules per regime, never both in one regime:
- cash_basis:    card purchase excluded, invoice payment included
- accrual_basis: card purchase included, invoice payment excluded
"""

from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Optional

from oik_scheduler.domain.models import AccountingRegime, DateField, EntryKind, LedgerEntry

DEFAULT_ACCOUNTING_REGIME = AccountingRegime.CASH_BASIS


@dataclass(frozen=True)
class CardRegimeRule:
    purchase_included: bool
    invoice_payment_included: bool
    summary: str


_DATE_FIELDS: Dict[AccountingRegime, DateField] = {
    AccountingRegime.CASH_BASIS: DateField.CASH_DATE,
    AccountingRegime.ACCRUAL_BASIS: DateField.EVENT_DATE,
}

CARD_REGIME_RULES: Dict[AccountingRegime, CardRegimeRule] = {
    AccountingRegime.CASH_BASIS: CardRegimeRule(
        purchase_included=False,
        invoice_payment_included=True,
        summary="Card is a payment method; spending counts when the invoice is paid.",
    ),
    AccountingRegime.ACCRUAL_BASIS: CardRegimeRule(
        purchase_included=True,
        invoice_payment_included=False,
        summary="Spending counts in the month of purchase; invoice payments are ignored.",
    ),
}


def date_field_for(regime: AccountingRegime) -> DateField:
    """Date field that governs every budget/report computation under a regime"""
    return _DATE_FIELDS[AccountingRegime(regime)]


def date_accessor(regime: AccountingRegime) -> Callable[[LedgerEntry], Optional[date]]:
    """Callable reading the regime's date from an entry, for aggregation call sites"""
    attribute = date_field_for(regime).value
    return lambda entry: getattr(entry, attribute)


def is_cash_basis(regime: AccountingRegime) -> bool:
    return AccountingRegime(regime) is AccountingRegime.CASH_BASIS


def is_accrual_basis(regime: AccountingRegime) -> bool:
    return AccountingRegime(regime) is AccountingRegime.ACCRUAL_BASIS


def should_include_card_purchase(regime: AccountingRegime) -> bool:
    return CARD_REGIME_RULES[AccountingRegime(regime)].purchase_included


def should_include_invoice_payment(regime: AccountingRegime) -> bool:
    return CARD_REGIME_RULES[AccountingRegime(regime)].invoice_payment_included


def counts_toward_actuals(entry: LedgerEntry, regime: AccountingRegime) -> bool:
    """Whether an entry's kind is counted at all under the regime"""
    if entry.kind is EntryKind.CARD_PURCHASE:
        return should_include_card_purchase(regime)
    if entry.kind is EntryKind.INVOICE_PAYMENT:
        return should_include_invoice_payment(regime)
    return True


def compute_actuals(
    entries: List[LedgerEntry],
    regime: AccountingRegime,
    period_start: date,
    period_end: date,
) -> int:
    """
    Sum of entries realized within [period_start, period_end] under a regime.

    Entries without a resolved date (an uncleared cheque under cash basis)
    are not realized yet and are left out.
    """
    resolve_date = date_accessor(regime)
    total = 0
    for entry in entries:
        if not counts_toward_actuals(entry, regime):
            continue
        when = resolve_date(entry)
        if when is None:
            continue
        if period_start <= when <= period_end:
            total += entry.amount_cents
    return total
