"""
API Endpoints - disruption helper surface
Contains only:
- POST /api/disruption-helper
- GET /api/health
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from disruption_helper.models.disruption import DisruptionResponse
from disruption_helper.models.query import FlightQuery
from disruption_helper.services.helper import DisruptionHelperService, get_disruption_helper_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["Disruption Helper"])


async def _read_payload(request: Request) -> Any:
    """Decode the JSON body; anything unreadable counts as an empty object."""
    body = await request.body()
    if not body:
        return {}
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.warning("Malformed request body on %s: %s", request.url.path, str(e))
        return {}


@router.post(
    "/disruption-helper",
    response_model=DisruptionResponse,
    summary="Explain a flight disruption and estimate eligibility",
)
async def disruption_helper(
    request: Request,
    service: DisruptionHelperService = Depends(get_disruption_helper_service),
) -> DisruptionResponse:
    """
    Reconcile declared flight facts with live status, classify eligibility
    and produce an explanation. Always answers 200 for POST requests.
    """
    payload = await _read_payload(request)
    query = FlightQuery.from_payload(payload)

    logger.info(
        "Disruption request: %s on %s (declared: %s)",
        query.flight_number or "-",
        query.flight_date or "-",
        query.issue_type.value or "-",
    )

    return await run_in_threadpool(service.analyze, query)


@router.get("/health", summary="Report which collaborators are configured")
async def health(
    service: DisruptionHelperService = Depends(get_disruption_helper_service),
) -> Dict[str, Any]:
    return {
        "status": "ok",
        "flight_status_provider": service.flight_status_available,
        "explanation_provider": service.explanation_available,
    }
