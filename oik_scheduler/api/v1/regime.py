"""Accounting regime lookup and regime-driven actuals"""

from fastapi import APIRouter

from oik_scheduler.api.v1.schemas import ActualsRequest, ActualsResponse, RegimeResponse
from oik_scheduler.domain.accounting_regime import CARD_REGIME_RULES, compute_actuals, date_field_for
from oik_scheduler.domain.models import AccountingRegime
from oik_scheduler.infrastructure.observability.metrics import projection_counter

router = APIRouter()


@router.get("/regime/{regime}", response_model=RegimeResponse)
def get_regime(regime: AccountingRegime):
    """Date field and card rules a regime resolves to"""
    rule = CARD_REGIME_RULES[regime]
    return RegimeResponse(
        regime=regime,
        date_field=date_field_for(regime),
        card_purchase_included=rule.purchase_included,
        invoice_payment_included=rule.invoice_payment_included,
        summary=rule.summary,
    )


@router.post("/actuals", response_model=ActualsResponse)
def get_actuals(request_body: ActualsRequest):
    """Realized total for a period under the family's regime"""
    total = compute_actuals(
        [e.to_domain() for e in request_body.entries],
        request_body.regime,
        request_body.period_start,
        request_body.period_end,
    )
    projection_counter.labels(kind="actuals").inc()
    return ActualsResponse(
        regime=request_body.regime,
        date_field=date_field_for(request_body.regime),
        total_cents=total,
    )
