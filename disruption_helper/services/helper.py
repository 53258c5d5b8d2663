"""
Disruption Helper Service - runs one request through the whole pipeline
reconcile -> classify -> explain -> assemble
"""

import logging
from typing import Optional

from disruption_helper.models.disruption import DisruptionResponse
from disruption_helper.models.query import FlightQuery
from disruption_helper.services.assembler import assemble_response
from disruption_helper.services.eligibility import classify
from disruption_helper.services.explanation import ExplanationGate, ExplanationProvider
from disruption_helper.services.reconciler import FlightStatusLookup, StatusReconciler

logger = logging.getLogger(__name__)


class DisruptionHelperService:
    """
    Answers "what happened to my flight, and what am I owed?"

    Both collaborators are optional and passed in explicitly; the service
    holds no per-request state, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        status_client: Optional[FlightStatusLookup] = None,
        generator: Optional[ExplanationProvider] = None
    ):
        self.reconciler = StatusReconciler(status_client)
        self.gate = ExplanationGate(generator)

    @property
    def flight_status_available(self) -> bool:
        return self.reconciler.provider_available

    @property
    def explanation_available(self) -> bool:
        return self.gate.generator_available

    def analyze(self, query: FlightQuery) -> DisruptionResponse:
        facts, _ = self.reconciler.reconcile(query)
        eligibility = classify(facts.disruption_type, facts.delay_minutes)
        explanation = self.gate.explain(query, facts, eligibility)

        logger.info(
            "Disruption analysis %s: source=%s type=%s delay=%s eligibility=%s explanation=%s",
            query.flight_number or "-",
            facts.provenance.value,
            facts.disruption_type.value,
            facts.delay_minutes,
            eligibility.label.value,
            explanation.source.value,
        )

        return assemble_response(query, facts, eligibility, explanation)


# Singleton instance
_service_instance: Optional[DisruptionHelperService] = None


def get_disruption_helper_service() -> DisruptionHelperService:
    """
    Get singleton service wired from Settings

    Missing credentials leave the matching collaborator unset rather than
    failing startup.
    """
    global _service_instance

    if _service_instance is None:
        from disruption_helper.services.aerodatabox import get_aerodatabox_client
        from disruption_helper.services.gemini import get_gemini_service

        _service_instance = DisruptionHelperService(
            status_client=get_aerodatabox_client(),
            generator=get_gemini_service(),
        )

    return _service_instance


def reset_disruption_helper_service() -> None:
    """Drop the cached service (used after settings reloads)"""
    global _service_instance
    _service_instance = None
