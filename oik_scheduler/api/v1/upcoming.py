"""POST /v1/upcoming and /v1/card-closings - due date projections"""

import hashlib
import logging
import time
from typing import List

from fastapi import APIRouter, Depends, Request

from oik_scheduler.api.dependencies import get_projection_cache, get_request_id
from oik_scheduler.api.v1.schemas import (
    AmountSchema,
    CardClosingSchema,
    CardClosingsRequest,
    UpcomingDueSchema,
    UpcomingRequest,
    UpcomingResponse,
)
from oik_scheduler.config import settings
from oik_scheduler.domain.billing_cycle import build_card_closings, is_valid_day
from oik_scheduler.domain.models import Direction
from oik_scheduler.domain.upcoming import build_upcoming
from oik_scheduler.infrastructure.cache import ProjectionCache, get_or_compute
from oik_scheduler.infrastructure.observability.logging import log_projection
from oik_scheduler.infrastructure.observability.metrics import (
    projection_counter,
    record_upcoming,
    skipped_record_counter,
)

router = APIRouter()


def projection_tags(family_id: str) -> List[str]:
    """Tags invalidated when a family's obligations or cards change"""
    return [f"obligations:{family_id}", f"cards:{family_id}"]


def records_digest(request_body: UpcomingRequest) -> str:
    """Fingerprint of the supplied records, so a changed payload never reads a stale projection"""
    payload = request_body.model_dump_json(include={"recurring_obligations", "credit_cards"})
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def skipped_reasons(request_body: UpcomingRequest) -> List[str]:
    """Reason per active record left out of the projection for an unusable day"""
    reasons = []
    for obligation in request_body.recurring_obligations:
        if obligation.is_active and obligation.direction == Direction.EXPENSE and not is_valid_day(obligation.day_of_month):
            reasons.append("invalid_day_of_month")
    for card in request_body.credit_cards:
        if card.is_active and not is_valid_day(card.due_day):
            reasons.append("invalid_due_day")
    return reasons


@router.post("/upcoming", response_model=UpcomingResponse)
def get_upcoming(
    request_body: UpcomingRequest,
    request: Request,
    cache: ProjectionCache = Depends(get_projection_cache),
):
    """
    Project upcoming dues for one family.

    Flow:
    1. Look up (family, reference date, window, records digest) in the projection cache
    2. On a miss, build the projection from the supplied records
    3. Record metrics and a structured log line
    """
    start_time = time.time()
    request_id = get_request_id(request)
    days_ahead = request_body.days_ahead if request_body.days_ahead is not None else settings.default_days_ahead

    def compute():
        return build_upcoming(
            days_ahead,
            [o.to_domain() for o in request_body.recurring_obligations],
            [c.to_domain() for c in request_body.credit_cards],
            request_body.reference_date,
        )

    upcoming, cache_hit = get_or_compute(
        cache,
        ("upcoming", request_body.family_id, request_body.reference_date, days_ahead, records_digest(request_body)),
        compute,
        settings.cache_ttl_seconds,
        projection_tags(request_body.family_id),
    )

    reasons = skipped_reasons(request_body)
    if not cache_hit:
        for reason in reasons:
            skipped_record_counter.labels(reason=reason).inc()
        record_upcoming(u.status.value for u in upcoming)

    duration_ms = (time.time() - start_time) * 1000
    log_projection(request_id, request_body.family_id, len(upcoming), len(reasons), cache_hit, duration_ms)

    items = [
        UpcomingDueSchema(
            id=u.id,
            name=u.name,
            obligation_type=u.obligation_type,
            amount=AmountSchema.from_domain(u.amount),
            due_date=u.due_date,
            days_until_due=u.days_until_due,
            status=u.status,
            source=u.source,
            source_id=u.source_id,
            category_id=u.category_id,
            linked_account_id=u.linked_account_id,
            linked_card_id=u.linked_card_id,
        )
        for u in upcoming
    ]

    return UpcomingResponse(
        family_id=request_body.family_id,
        reference_date=request_body.reference_date,
        days_ahead=days_ahead,
        items=items,
    )


@router.post("/card-closings", response_model=List[CardClosingSchema])
def get_card_closings(request_body: CardClosingsRequest, request: Request):
    """Statement status per active card"""
    closings = build_card_closings(
        [c.to_domain() for c in request_body.credit_cards],
        request_body.reference_date,
    )
    projection_counter.labels(kind="card_closings").inc()

    skipped = sum(
        1
        for c in request_body.credit_cards
        if c.is_active and not (is_valid_day(c.closing_day) and is_valid_day(c.due_day))
    )
    if skipped:
        skipped_record_counter.labels(reason="invalid_card_days").inc(skipped)
        logging.info(
            f"Skipped {skipped} card(s) without valid closing/due day",
            extra={"request_id": get_request_id(request)},
        )

    return [
        CardClosingSchema(
            card_id=c.card_id,
            card_name=c.card_name,
            closing_date=c.closing_date,
            due_date=c.due_date,
            days_until_closing=c.days_until_closing,
            days_until_due=c.days_until_due,
            status=c.status,
            estimated_amount=AmountSchema.from_domain(c.estimated_amount),
        )
        for c in closings
    ]
