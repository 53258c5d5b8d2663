"""
Response Assembler - packages reconciled facts into the public response
"""

from disruption_helper.models.disruption import (
    DisruptionFacts,
    DisruptionResponse,
    Eligibility,
    EligibilitySummary,
    ExplanationResult,
    StatusSummary,
)
from disruption_helper.models.query import FlightQuery


def assemble_response(
    query: FlightQuery,
    facts: DisruptionFacts,
    eligibility: Eligibility,
    explanation: ExplanationResult
) -> DisruptionResponse:
    status = StatusSummary(
        flight_number=query.flight_number,
        route=query.route,
        disruption_type=facts.disruption_type,
        delay_minutes=facts.delay_minutes,
        scheduled_departure_local=facts.scheduled_departure_local,
        actual_departure_local=facts.actual_departure_local,
        scheduled_arrival_local=facts.scheduled_arrival_local,
        estimated_arrival_local=facts.estimated_arrival_local,
        source=facts.provenance,
    )

    return DisruptionResponse(
        status=status,
        eligibility=EligibilitySummary(
            label=eligibility.label,
            kind=eligibility.kind,
            summary=eligibility.summary,
        ),
        explanation=explanation.text,
        options=[],
        messages=[],
        hotels=[],
    )
