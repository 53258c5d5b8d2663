"""
Flight data models - Pydantic schemas for AeroDataBox responses
Normalizes a flight status record into the fields the reconciler trusts
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Any
from datetime import datetime
from enum import Enum


# Delays shorter than this are reported as on time
DELAY_THRESHOLD_MINUTES = 15


class DisruptionType(str, Enum):
    """What happened to a flight"""
    NONE = "none"
    DELAY = "delay"
    CANCELLATION = "cancellation"
    MISSED_CONNECTION = "missed_connection"
    UNKNOWN = "unknown"


def parse_local_time(value: Any) -> Optional[datetime]:
    """Parse AeroDataBox local time strings such as '2026-03-01 10:05+01:00'"""
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def minutes_between(start: Optional[str], end: Optional[str]) -> Optional[int]:
    """Whole minutes from start to end, None if either side is unusable"""
    start_dt = parse_local_time(start)
    end_dt = parse_local_time(end)
    if start_dt is None or end_dt is None:
        return None
    if (start_dt.tzinfo is None) != (end_dt.tzinfo is None):
        return None
    return int((end_dt - start_dt).total_seconds() // 60)


class VerifiedStatus(BaseModel):
    """
    Flight status as located by the provider

    disruption_type is limited to none/delay/cancellation; delay_minutes
    may be negative for early flights.
    """

    disruption_type: DisruptionType = Field(default=DisruptionType.NONE, description="none, delay or cancellation")
    delay_minutes: Optional[int] = Field(None, description="Delay in minutes, negative if early")

    scheduled_departure_local: Optional[str] = Field(None, description="Scheduled departure (local time)")
    actual_departure_local: Optional[str] = Field(None, description="Actual or revised departure (local time)")
    scheduled_arrival_local: Optional[str] = Field(None, description="Scheduled arrival (local time)")
    estimated_arrival_local: Optional[str] = Field(None, description="Estimated or revised arrival (local time)")

    provider_status: Optional[str] = Field(None, description="Raw provider status, e.g. 'Delayed'")

    @field_validator('scheduled_departure_local', 'actual_departure_local',
                     'scheduled_arrival_local', 'estimated_arrival_local', mode='before')
    @classmethod
    def validate_datetime_format(cls, v):
        """Drop timestamps that are not valid ISO-like local times"""
        if parse_local_time(v) is None:
            return None
        return v.strip()

    class Config:
        json_schema_extra = {
            "example": {
                "disruption_type": "delay",
                "delay_minutes": 200,
                "scheduled_departure_local": "2026-03-01 10:00+01:00",
                "actual_departure_local": "2026-03-01 13:20+01:00",
                "scheduled_arrival_local": "2026-03-01 12:30+01:00",
                "estimated_arrival_local": "2026-03-01 15:45+01:00",
                "provider_status": "Delayed"
            }
        }


def _local_time(section: Dict[str, Any], key: str, legacy_key: Optional[str] = None) -> Optional[str]:
    """Read '<key>.local', falling back to the flat '<legacy_key>' field"""
    nested = section.get(key)
    if isinstance(nested, dict) and nested.get("local"):
        return nested.get("local")
    if legacy_key:
        return section.get(legacy_key)
    return None


def _first_present(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if parse_local_time(value) is not None:
            return value
    return None


def classify_provider_status(provider_status: Optional[str], delay_minutes: Optional[int]) -> DisruptionType:
    status_text = (provider_status or "").lower()
    if "cancel" in status_text:
        return DisruptionType.CANCELLATION
    if status_text == "delayed":
        return DisruptionType.DELAY
    if delay_minutes is not None and delay_minutes >= DELAY_THRESHOLD_MINUTES:
        return DisruptionType.DELAY
    return DisruptionType.NONE


def parse_flight_record(flight: Dict[str, Any]) -> VerifiedStatus:
    """
    Flatten one AeroDataBox flight record into a VerifiedStatus

    Delay is taken from the departure side when an actual/revised time is
    known, otherwise from the arrival estimate.
    """
    departure = flight.get("departure") or {}
    arrival = flight.get("arrival") or {}
    provider_status = flight.get("status")

    scheduled_departure = _local_time(departure, "scheduledTime", "scheduledTimeLocal")
    actual_departure = _first_present(
        _local_time(departure, "revisedTime", "actualTimeLocal"),
        _local_time(departure, "runwayTime"),
    )
    scheduled_arrival = _local_time(arrival, "scheduledTime", "scheduledTimeLocal")
    estimated_arrival = _first_present(
        _local_time(arrival, "revisedTime", "actualTimeLocal"),
        _local_time(arrival, "predictedTime", "estimatedTimeLocal"),
    )

    delay_minutes = minutes_between(scheduled_departure, actual_departure)
    if delay_minutes is None:
        delay_minutes = minutes_between(scheduled_arrival, estimated_arrival)

    return VerifiedStatus(
        disruption_type=classify_provider_status(provider_status, delay_minutes),
        delay_minutes=delay_minutes,
        scheduled_departure_local=scheduled_departure,
        actual_departure_local=actual_departure,
        scheduled_arrival_local=scheduled_arrival,
        estimated_arrival_local=estimated_arrival,
        provider_status=provider_status if isinstance(provider_status, str) else None,
    )


def parse_aerodatabox_response(raw_json: Any) -> Optional[VerifiedStatus]:
    """
    Parse an AeroDataBox 'flights by number' response

    Args:
        raw_json: Decoded JSON body (a list of flight records)

    Returns:
        VerifiedStatus for the first record, or None if the list is empty

    Raises:
        ValueError: If the payload is not a list of flight objects
    """
    if isinstance(raw_json, dict):
        raw_json = [raw_json] if raw_json else []
    if not isinstance(raw_json, list):
        raise ValueError(f"Unexpected AeroDataBox payload type: {type(raw_json).__name__}")

    flights: List[Dict[str, Any]] = [f for f in raw_json if isinstance(f, dict)]
    if raw_json and not flights:
        raise ValueError("AeroDataBox payload contains no flight objects")
    if not flights:
        return None

    return parse_flight_record(flights[0])
