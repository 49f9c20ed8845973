"""POST /v1/cache/invalidate - drop cached projections after records change"""

import logging

from fastapi import APIRouter, Depends, Request

from oik_scheduler.api.dependencies import get_projection_cache, get_request_id
from oik_scheduler.api.v1.schemas import InvalidateRequest, InvalidateResponse
from oik_scheduler.infrastructure.cache import ProjectionCache

router = APIRouter()


@router.post("/cache/invalidate", response_model=InvalidateResponse)
def invalidate_cache(
    request_body: InvalidateRequest,
    request: Request,
    cache: ProjectionCache = Depends(get_projection_cache),
):
    """Evict projections tagged with any of the given tags (e.g. obligations:<family_id>)"""
    evicted = cache.invalidate(request_body.tags)
    logging.info(
        "Projection cache invalidated",
        extra={"request_id": get_request_id(request), "tags": request_body.tags, "evicted": evicted},
    )
    return InvalidateResponse(evicted=evicted)
