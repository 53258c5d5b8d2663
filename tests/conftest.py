"""Shared fixtures."""

import pytest
from fastapi.testclient import TestClient

from disruption_helper.models.flight import DisruptionType, VerifiedStatus
from disruption_helper.services.helper import DisruptionHelperService, get_disruption_helper_service


@pytest.fixture
def delayed_status() -> VerifiedStatus:
    return VerifiedStatus(
        disruption_type=DisruptionType.DELAY,
        delay_minutes=200,
        scheduled_departure_local="2025-01-01 10:00+01:00",
        actual_departure_local="2025-01-01 13:20+01:00",
        scheduled_arrival_local="2025-01-01 12:30+01:00",
        estimated_arrival_local="2025-01-01 15:50+01:00",
        provider_status="Delayed",
    )


@pytest.fixture
def scenario_payload() -> dict:
    return {
        "from": "Madrid",
        "to": "Bogota",
        "airline": "Iberia",
        "flightNumber": "AB123",
        "flightDate": "2025-01-01",
        "issueType": "delay",
        "delayMinutes": 30,
    }


@pytest.fixture
def make_client():
    """Build a TestClient whose service uses the given collaborators."""
    from disruption_helper.main import app

    def _make(status_client=None, generator=None) -> TestClient:
        service = DisruptionHelperService(status_client=status_client, generator=generator)
        app.dependency_overrides[get_disruption_helper_service] = lambda: service
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
