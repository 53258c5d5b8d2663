"""
Tests for POST /api/disruption-helper.

Covers the end-to-end scenarios:
- verified delay overrides what the traveller typed
- flight not found suppresses generation
- no status provider discloses unverified facts
- neither collaborator configured
plus method handling and malformed bodies.
"""

from disruption_helper.services.aerodatabox import AeroDataBoxAPIError
from disruption_helper.services.explanation import (
    NO_VERIFICATION_NO_GENERATOR_TEXT,
    NOT_FOUND_TEXT,
    PROVIDER_ERROR_TEXT,
    UNVERIFIED_DISCLOSURE,
)

from tests.fakes import FakeGenerator, FakeStatusClient

URL = "/api/disruption-helper"


def test_verified_delay_wins(make_client, scenario_payload, delayed_status):
    """Scenario A: provider says 200 minutes, traveller said 30."""
    generator = FakeGenerator(text="Iberia may offer care and rebooking.")
    client = make_client(FakeStatusClient(status=delayed_status), generator)

    resp = client.post(URL, json=scenario_payload)
    assert resp.status_code == 200
    data = resp.json()

    assert data["status"]["disruptionType"] == "delay"
    assert data["status"]["delayMinutes"] == 200
    assert data["status"]["source"] == "verified"
    assert data["status"]["flightNumber"] == "AB123"
    assert data["status"]["route"] == "Madrid → Bogota"
    assert data["status"]["actualDepartureLocal"] == "2025-01-01 13:20+01:00"
    assert data["eligibility"] == {
        "label": "Maybe",
        "type": "mixed",
        "summary": data["eligibility"]["summary"],
    }
    assert data["explanation"] == "Iberia may offer care and rebooking."
    assert data["options"] == [] and data["messages"] == [] and data["hotels"] == []


def test_flight_not_found(make_client, scenario_payload):
    """Scenario B: provider reachable, no such flight; generator never called."""
    generator = FakeGenerator()
    client = make_client(FakeStatusClient(status=None), generator)

    data = client.post(URL, json=scenario_payload).json()
    assert data["status"]["source"] == "not_found"
    assert data["status"]["delayMinutes"] is None
    assert data["status"]["disruptionType"] == "unknown"
    assert data["explanation"] == NOT_FOUND_TEXT
    assert data["eligibility"]["label"] == "Unknown"
    assert generator.prompts == []


def test_provider_failure(make_client, scenario_payload):
    generator = FakeGenerator()
    client = make_client(FakeStatusClient(error=AeroDataBoxAPIError("503")), generator)

    resp = client.post(URL, json=scenario_payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"]["source"] == "provider_error"
    assert data["explanation"] == PROVIDER_ERROR_TEXT
    assert data["eligibility"]["label"] == "Unknown"
    assert generator.prompts == []


def test_no_provider_discloses_unverified(make_client, scenario_payload):
    """Scenario C: no status provider, generator configured."""
    client = make_client(None, FakeGenerator(text="Short delays rarely qualify."))

    data = client.post(URL, json=scenario_payload).json()
    assert data["status"]["source"] == "no_provider"
    assert data["status"]["delayMinutes"] == 30
    assert data["eligibility"]["label"] == "Unlikely"
    assert data["explanation"].startswith(UNVERIFIED_DISCLOSURE)


def test_nothing_configured(make_client):
    """Scenario D: neither collaborator configured."""
    client = make_client(None, None)

    data = client.post(URL, json={"flightNumber": "AB123", "flightDate": "2025-01-01"}).json()
    assert data["status"]["source"] == "no_provider"
    assert data["explanation"] == NO_VERIFICATION_NO_GENERATOR_TEXT
    assert data["eligibility"]["label"] == "Unknown"


def test_pipeline_is_idempotent(make_client, scenario_payload, delayed_status):
    client = make_client(FakeStatusClient(status=delayed_status), None)
    first = client.post(URL, json=scenario_payload).json()
    second = client.post(URL, json=scenario_payload).json()
    assert first["status"] == second["status"]
    assert first["eligibility"] == second["eligibility"]


def test_get_is_method_not_allowed(make_client):
    resp = make_client().get(URL)
    assert resp.status_code == 405
    assert resp.json()["status"] == "error"


def test_malformed_body_is_empty_query(make_client):
    client = make_client(None, None)
    resp = client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"]["flightNumber"] == ""
    assert data["status"]["route"] == ""
    assert data["status"]["disruptionType"] == "unknown"
    assert data["eligibility"]["label"] == "Unknown"


def test_non_object_body_is_empty_query(make_client):
    resp = make_client(None, None).post(URL, json=["delay", 200])
    assert resp.status_code == 200
    assert resp.json()["status"]["source"] == "no_provider"


def test_empty_body(make_client):
    resp = make_client(None, None).post(URL)
    assert resp.status_code == 200


def test_health_reports_collaborators(make_client):
    data = make_client(FakeStatusClient(), None).get("/api/health").json()
    assert data == {"status": "ok", "flight_status_provider": True, "explanation_provider": False}


def test_root(make_client):
    data = make_client().get("/").json()
    assert data["endpoints"]["disruption_helper"] == "POST /api/disruption-helper"
