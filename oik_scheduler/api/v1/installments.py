"""POST /v1/installments - amortization schedules and future installment projection"""

import logging
from typing import List

from fastapi import APIRouter, HTTPException, Request

from oik_scheduler.api.dependencies import get_request_id
from oik_scheduler.api.v1.schemas import (
    FutureInstallmentsRequest,
    FuturePaymentSchema,
    InstallmentPlanRequest,
    InstallmentPlanResponse,
    InstallmentSchema,
)
from oik_scheduler.config import settings
from oik_scheduler.domain.exceptions import InvalidInstallmentInput
from oik_scheduler.domain.installments import (
    generate_installment_plan,
    installment_value,
    project_future_installments,
)
from oik_scheduler.infrastructure.observability.metrics import (
    projection_counter,
    record_installment_schedule,
)

router = APIRouter()


@router.post("/installments", response_model=InstallmentPlanResponse)
def create_installment_plan(request_body: InstallmentPlanRequest, request: Request):
    """
    Build an exact-sum monthly schedule for a financed purchase.

    Returns 422 when the total is not positive or the count is outside 2-48;
    no partial schedule is ever returned.
    """
    try:
        installments = generate_installment_plan(
            request_body.total_amount_cents,
            request_body.installments_total,
            request_body.first_due_date,
        )
    except InvalidInstallmentInput as e:
        record_installment_schedule(False)
        logging.warning(f"Invalid installment input: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=e.reason)

    record_installment_schedule(True, request_body.installments_total)

    return InstallmentPlanResponse(
        total_amount_cents=request_body.total_amount_cents,
        installments_total=request_body.installments_total,
        installment_value_cents=installment_value(
            request_body.total_amount_cents, request_body.installments_total
        ),
        installments=[
            InstallmentSchema(number=i.number, due_date=i.due_date, amount_cents=i.amount_cents)
            for i in installments
        ],
    )


@router.post("/installments/future", response_model=List[FuturePaymentSchema])
def get_future_installments(request_body: FutureInstallmentsRequest):
    """Installment payments falling due over the next months"""
    months = request_body.months if request_body.months is not None else settings.default_future_months
    payments = project_future_installments(
        [g.to_domain() for g in request_body.groups],
        request_body.reference_date,
        months,
    )
    projection_counter.labels(kind="future_installments").inc()

    return [
        FuturePaymentSchema(
            group_id=p.group_id,
            number=p.number,
            due_date=p.due_date,
            amount_cents=p.amount_cents,
            description=p.description,
            label=p.label,
            category_id=p.category_id,
        )
        for p in payments
    ]
