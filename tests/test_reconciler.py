"""Tests for StatusReconciler trust rules."""

import pytest

from disruption_helper.models.disruption import Provenance
from disruption_helper.models.flight import DisruptionType, VerifiedStatus
from disruption_helper.models.query import FlightQuery
from disruption_helper.services.aerodatabox import AeroDataBoxAPIError
from disruption_helper.services.reconciler import StatusReconciler

from tests.fakes import FakeStatusClient


def test_verified_status_wins_over_declared(scenario_payload, delayed_status):
    client = FakeStatusClient(status=delayed_status)
    facts, raw = StatusReconciler(client).reconcile(FlightQuery.from_payload(scenario_payload))

    assert client.calls == [("AB123", "2025-01-01")]
    assert raw is delayed_status
    assert facts.provenance == Provenance.VERIFIED
    assert facts.disruption_type == DisruptionType.DELAY
    assert facts.delay_minutes == 200
    assert facts.actual_departure_local == "2025-01-01 13:20+01:00"
    assert facts.estimated_arrival_local == "2025-01-01 15:50+01:00"


@pytest.mark.parametrize("declared", ["cancellation", "delay", "missed_connection", ""])
def test_verified_on_time_flight_ignores_declared_type(declared):
    status = VerifiedStatus(disruption_type=DisruptionType.NONE, delay_minutes=-3)
    query = FlightQuery.from_payload({
        "flightNumber": "AB123", "flightDate": "2025-01-01",
        "issueType": declared, "delayMinutes": 400,
    })
    facts, _ = StatusReconciler(FakeStatusClient(status=status)).reconcile(query)
    assert facts.disruption_type == DisruptionType.NONE
    assert facts.delay_minutes == -3


def test_not_found_discards_declared_facts(scenario_payload):
    facts, raw = StatusReconciler(FakeStatusClient(status=None)).reconcile(
        FlightQuery.from_payload(scenario_payload)
    )
    assert raw is None
    assert facts.provenance == Provenance.NOT_FOUND
    assert facts.disruption_type == DisruptionType.UNKNOWN
    assert facts.delay_minutes is None
    assert facts.scheduled_departure_local is None


@pytest.mark.parametrize("error", [AeroDataBoxAPIError("down"), RuntimeError("unexpected")])
def test_provider_failure_is_provider_error(scenario_payload, error):
    facts, raw = StatusReconciler(FakeStatusClient(error=error)).reconcile(
        FlightQuery.from_payload(scenario_payload)
    )
    assert raw is None
    assert facts.provenance == Provenance.PROVIDER_ERROR
    assert facts.disruption_type == DisruptionType.UNKNOWN
    assert facts.delay_minutes is None


def test_no_provider_uses_declared_facts(scenario_payload):
    facts, raw = StatusReconciler(None).reconcile(FlightQuery.from_payload(scenario_payload))
    assert raw is None
    assert facts.provenance == Provenance.NO_PROVIDER
    assert facts.disruption_type == DisruptionType.DELAY
    assert facts.delay_minutes == 30


def test_missing_lookup_keys_skip_provider(delayed_status):
    client = FakeStatusClient(status=delayed_status)
    query = FlightQuery.from_payload({"flightNumber": "AB123", "issueType": "cancellation"})
    facts, _ = StatusReconciler(client).reconcile(query)
    assert client.calls == []
    assert facts.provenance == Provenance.NO_PROVIDER
    assert facts.disruption_type == DisruptionType.CANCELLATION
    assert facts.delay_minutes is None


def test_no_provider_without_issue_type_is_unknown():
    facts, _ = StatusReconciler(None).reconcile(FlightQuery())
    assert facts.disruption_type == DisruptionType.UNKNOWN
    assert facts.provenance == Provenance.NO_PROVIDER
