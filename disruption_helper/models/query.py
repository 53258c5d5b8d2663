"""
Request models - Pydantic schema for the traveller's disruption query
Parsing is lenient: bad values are normalized to defaults, never rejected
"""

import math
import re
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel


class IssueType(str, Enum):
    """Disruption declared by the traveller"""
    DELAY = "delay"
    CANCELLATION = "cancellation"
    MISSED_CONNECTION = "missed_connection"
    NONE = ""


# Carrier designator (2-3 chars), 1-5 digits, optional suffix letter
FLIGHT_NUMBER_PATTERN = re.compile(r"^[A-Z0-9]{2,3}\d{1,5}[A-Z]?$")


def _coerce_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)):
        return str(value)
    return ""


class FlightQuery(BaseModel):
    """
    Flight facts as declared by the traveller
    Exists only for the lifetime of one request
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "from": "Madrid",
                "to": "Bogota",
                "airline": "Iberia",
                "flightNumber": "IB6312",
                "flightDate": "2026-03-01",
                "issueType": "delay",
                "delayMinutes": 200,
                "cause": "technical",
                "region": "EU",
                "priority": "earliest",
                "extraContext": "Travelling with a baby"
            }
        }
    )

    origin: str = Field(default="", alias="from", description="Departure location (free text)")
    destination: str = Field(default="", alias="to", description="Arrival location (free text)")
    airline: str = Field(default="", description="Airline name as entered")
    flight_number: str = Field(default="", description="Flight number, e.g. IB6312")
    flight_date: str = Field(default="", description="Flight date in YYYY-MM-DD format")
    issue_type: IssueType = Field(default=IssueType.NONE, description="delay, cancellation, missed_connection or empty")
    delay_minutes: Optional[int] = Field(default=None, description="Declared delay in minutes")
    cause: str = Field(default="", description="Cause given by the airline, if any")
    region: str = Field(default="", description="Jurisdiction hint, e.g. EU, UK, US")
    priority: str = Field(default="earliest", description="What matters most to the traveller")
    extra_context: str = Field(default="", description="Free text, advisory only")

    @field_validator(
        "origin", "destination", "airline", "cause", "region", "extra_context",
        mode="before"
    )
    @classmethod
    def validate_text(cls, v):
        return _coerce_text(v)

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v):
        return _coerce_text(v) or "earliest"

    @field_validator("flight_number", mode="before")
    @classmethod
    def validate_flight_number(cls, v):
        """Upper-case and drop inner whitespace ('ib 6312' -> 'IB6312'); anything else becomes empty"""
        text = "".join(_coerce_text(v).upper().split())
        return text if FLIGHT_NUMBER_PATTERN.match(text) else ""

    @field_validator("flight_date", mode="before")
    @classmethod
    def validate_flight_date(cls, v):
        """Keep only valid YYYY-MM-DD dates; anything else becomes empty"""
        text = _coerce_text(v)[:10]
        try:
            parsed = date.fromisoformat(text)
        except ValueError:
            return ""
        return text if parsed.isoformat() == text else ""

    @field_validator("issue_type", mode="before")
    @classmethod
    def validate_issue_type(cls, v):
        text = _coerce_text(v).lower()
        allowed = {item.value for item in IssueType}
        return text if text in allowed else ""

    @field_validator("delay_minutes", mode="before")
    @classmethod
    def validate_delay_minutes(cls, v):
        """Non-negative whole minutes, otherwise null"""
        if v is None or isinstance(v, bool):
            return None
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                return None
        if isinstance(v, (int, float)):
            if isinstance(v, float) and (math.isnan(v) or math.isinf(v)):
                return None
            if v < 0:
                return None
            return int(v)
        return None

    @classmethod
    def from_payload(cls, payload: Any) -> "FlightQuery":
        """
        Build a query from an arbitrary decoded JSON body

        Anything that is not a JSON object yields an empty query.
        """
        if not isinstance(payload, dict):
            return cls()
        try:
            return cls.model_validate(payload)
        except ValidationError:
            return cls()

    @property
    def route(self) -> str:
        if self.origin and self.destination:
            return f"{self.origin} → {self.destination}"
        return ""

    def has_lookup_keys(self) -> bool:
        """Flight number and date are both needed to query a status provider"""
        return bool(self.flight_number and self.flight_date)

    def prompt_context(self) -> Dict[str, Any]:
        return {
            "airline": self.airline or "the airline",
            "flight_number": self.flight_number or "N/A",
            "flight_date": self.flight_date or "N/A",
            "route": self.route or "N/A",
            "cause": self.cause or "not provided",
            "region": self.region or "not provided",
            "priority": self.priority,
            "extra_context": self.extra_context or "none",
        }
