"""Tests for lenient FlightQuery parsing."""

from disruption_helper.models.query import FlightQuery, IssueType


def test_camel_case_payload(scenario_payload):
    query = FlightQuery.from_payload(scenario_payload)
    assert query.origin == "Madrid"
    assert query.destination == "Bogota"
    assert query.flight_number == "AB123"
    assert query.flight_date == "2025-01-01"
    assert query.issue_type == IssueType.DELAY
    assert query.delay_minutes == 30
    assert query.priority == "earliest"
    assert query.route == "Madrid → Bogota"


def test_non_object_payload_is_empty_query():
    for payload in (None, [], "text", 42):
        query = FlightQuery.from_payload(payload)
        assert query == FlightQuery()
        assert query.issue_type == IssueType.NONE
        assert query.delay_minutes is None


def test_flight_number_normalized():
    query = FlightQuery.from_payload({"flightNumber": " ib 6312 "})
    assert query.flight_number == "IB6312"


def test_flight_number_rejects_path_characters():
    for raw in ("../../airports/search/term?q=x#", "AB123/2025", "AB 12#3", "ABCD", "IB63123456"):
        assert FlightQuery.from_payload({"flightNumber": raw}).flight_number == ""

    query = FlightQuery.from_payload({"flightNumber": "../../airports?q=x#", "flightDate": "2025-1-1"})
    assert not query.has_lookup_keys()


def test_flight_number_accepts_common_shapes():
    for raw in ("LH400", "U21234", "BA2490A", "9W1"):
        assert FlightQuery.from_payload({"flightNumber": raw}).flight_number == raw


def test_invalid_date_dropped():
    assert FlightQuery.from_payload({"flightDate": "01/01/2025"}).flight_date == ""
    assert FlightQuery.from_payload({"flightDate": "2025-1-1"}).flight_date == ""
    assert FlightQuery.from_payload({"flightDate": "2025-02-30"}).flight_date == ""
    assert FlightQuery.from_payload({"flightDate": "2025-01-01T08:00"}).flight_date == "2025-01-01"


def test_unknown_issue_type_dropped():
    assert FlightQuery.from_payload({"issueType": "Diverted"}).issue_type == IssueType.NONE
    assert FlightQuery.from_payload({"issueType": "CANCELLATION"}).issue_type == IssueType.CANCELLATION


def test_delay_minutes_coercion():
    assert FlightQuery.from_payload({"delayMinutes": "90"}).delay_minutes == 90
    assert FlightQuery.from_payload({"delayMinutes": 45.0}).delay_minutes == 45
    assert FlightQuery.from_payload({"delayMinutes": -5}).delay_minutes is None
    assert FlightQuery.from_payload({"delayMinutes": True}).delay_minutes is None
    assert FlightQuery.from_payload({"delayMinutes": "soon"}).delay_minutes is None
    assert FlightQuery.from_payload({"delayMinutes": {"value": 3}}).delay_minutes is None


def test_wrong_types_become_defaults():
    query = FlightQuery.from_payload({"airline": ["Iberia"], "cause": None, "priority": ""})
    assert query.airline == ""
    assert query.cause == ""
    assert query.priority == "earliest"


def test_route_requires_both_ends():
    assert FlightQuery.from_payload({"from": "Madrid"}).route == ""


def test_lookup_keys():
    assert FlightQuery.from_payload({"flightNumber": "AB123", "flightDate": "2025-01-01"}).has_lookup_keys()
    assert not FlightQuery.from_payload({"flightNumber": "AB123"}).has_lookup_keys()
