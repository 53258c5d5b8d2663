"""
Status Reconciler - merges declared flight facts with provider status
Decides which facts are trustworthy and tags them with their provenance
"""

import logging
from typing import Optional, Protocol, Tuple

from disruption_helper.models.disruption import DisruptionFacts, Provenance
from disruption_helper.models.flight import DisruptionType, VerifiedStatus
from disruption_helper.models.query import FlightQuery

logger = logging.getLogger(__name__)


class FlightStatusLookup(Protocol):
    def lookup(self, flight_number: str, date: str) -> Optional[VerifiedStatus]:
        """Return status for a flight, None if not found; raise on failure."""


class StatusReconciler:
    """
    Produces one authoritative DisruptionFacts value per request

    Rules:
    - no provider, or no flight number/date: declared facts, NO_PROVIDER
    - provider located the flight: provider facts only, VERIFIED
    - provider has no such flight: unknown, NOT_FOUND
    - provider call failed: unknown, PROVIDER_ERROR

    Declared type/delay are never shown for a flight the provider could
    not confirm.
    """

    def __init__(self, status_client: Optional[FlightStatusLookup] = None):
        self.status_client = status_client

    @property
    def provider_available(self) -> bool:
        return self.status_client is not None

    def reconcile(self, query: FlightQuery) -> Tuple[DisruptionFacts, Optional[VerifiedStatus]]:
        """
        Reconcile a query against the status provider

        Args:
            query: Traveller's declared flight facts

        Returns:
            Tuple of (DisruptionFacts, raw VerifiedStatus or None)
        """
        if not self.provider_available or not query.has_lookup_keys():
            return self._from_declared(query), None

        try:
            status = self.status_client.lookup(query.flight_number, query.flight_date)
        except Exception as e:
            logger.error(
                "Status lookup failed for %s on %s: %s",
                query.flight_number, query.flight_date, str(e)
            )
            return DisruptionFacts(provenance=Provenance.PROVIDER_ERROR), None

        if status is None:
            logger.info("Flight %s on %s not found by provider", query.flight_number, query.flight_date)
            return DisruptionFacts(provenance=Provenance.NOT_FOUND), None

        return self._from_verified(status), status

    @staticmethod
    def _from_declared(query: FlightQuery) -> DisruptionFacts:
        if query.issue_type.value:
            disruption_type = DisruptionType(query.issue_type.value)
        else:
            disruption_type = DisruptionType.UNKNOWN

        return DisruptionFacts(
            disruption_type=disruption_type,
            delay_minutes=query.delay_minutes,
            provenance=Provenance.NO_PROVIDER,
        )

    @staticmethod
    def _from_verified(status: VerifiedStatus) -> DisruptionFacts:
        return DisruptionFacts(
            disruption_type=status.disruption_type or DisruptionType.NONE,
            delay_minutes=status.delay_minutes,
            scheduled_departure_local=status.scheduled_departure_local,
            actual_departure_local=status.actual_departure_local,
            scheduled_arrival_local=status.scheduled_arrival_local,
            estimated_arrival_local=status.estimated_arrival_local,
            provenance=Provenance.VERIFIED,
        )
