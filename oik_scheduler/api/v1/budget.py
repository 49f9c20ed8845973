"""POST /v1/budget/* - subcategory budget reconciliation"""

from typing import List

from fastapi import APIRouter

from oik_scheduler.api.v1.schemas import (
    IfAdjustmentRequest,
    IfAdjustmentSchema,
    RedistributeRequest,
    SubcategoryAmountSchema,
    ValidateBudgetRequest,
    ValidationResultSchema,
)
from oik_scheduler.domain.budget import (
    calculate_if_adjustment,
    redistribute_proportional,
    validate_subcategory_sum,
)

router = APIRouter()


@router.post("/budget/validate", response_model=ValidationResultSchema)
def validate_budget(request_body: ValidateBudgetRequest):
    """Compare subcategory sum with category total; mismatches are 200 responses"""
    result = validate_subcategory_sum(
        request_body.category_total_cents,
        [s.to_domain() for s in request_body.subcategories],
    )
    return ValidationResultSchema(
        is_valid=result.is_valid,
        difference_cents=result.difference_cents,
        kind=result.kind,
        message=result.message,
    )


@router.post("/budget/redistribute", response_model=List[SubcategoryAmountSchema])
def redistribute_budget(request_body: RedistributeRequest):
    """Rescale subcategories to a new category total, order preserved"""
    amounts = redistribute_proportional(
        [s.to_domain() for s in request_body.subcategories],
        request_body.new_category_total_cents,
    )
    return [SubcategoryAmountSchema(id=a.id, amount_cents=a.amount_cents, name=a.name) for a in amounts]


@router.post("/budget/if-adjustment", response_model=IfAdjustmentSchema)
def if_adjustment(request_body: IfAdjustmentRequest):
    """Check whether a subcategory increase can be financed from the IF margin"""
    adjustment = calculate_if_adjustment(
        request_body.category_total_cents,
        request_body.new_subcategory_total_cents,
        request_body.current_if_percentage,
        request_body.monthly_income_cents,
    )
    return IfAdjustmentSchema(
        new_category_total_cents=adjustment.new_category_total_cents,
        new_if_percentage=adjustment.new_if_percentage,
        requires_confirmation=adjustment.requires_confirmation,
        message=adjustment.message,
    )
