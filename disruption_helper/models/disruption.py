"""
Disruption models - reconciled facts, eligibility advisory, explanation
and the response shape returned to the frontend
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .flight import DisruptionType


class Provenance(str, Enum):
    """Trust level of the facts used to answer a request"""
    VERIFIED = "verified"
    NOT_FOUND = "not_found"
    PROVIDER_ERROR = "provider_error"
    NO_PROVIDER = "no_provider"
    UNVERIFIED = "unverified"


class EligibilityLabel(str, Enum):
    UNKNOWN = "Unknown"
    UNLIKELY = "Unlikely"
    MAYBE = "Maybe"


class ExplanationSource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"


class DisruptionFacts(BaseModel):
    """
    Authoritative facts for one request

    Under VERIFIED provenance disruption_type and delay_minutes come from the
    provider only, never from what the traveller typed.
    """

    model_config = ConfigDict(frozen=True)

    disruption_type: DisruptionType = DisruptionType.UNKNOWN
    delay_minutes: Optional[int] = None
    scheduled_departure_local: Optional[str] = None
    actual_departure_local: Optional[str] = None
    scheduled_arrival_local: Optional[str] = None
    estimated_arrival_local: Optional[str] = None
    provenance: Provenance = Provenance.UNVERIFIED

    @property
    def is_verified(self) -> bool:
        return self.provenance == Provenance.VERIFIED


class Eligibility(BaseModel):
    """Advisory, non-authoritative compensation/support estimate"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    label: EligibilityLabel
    summary: str
    # Reserved for a later split into monetary / logistical advice
    kind: str = Field(default="mixed", alias="type")


class ExplanationResult(BaseModel):
    text: str
    source: ExplanationSource

    @property
    def generated(self) -> bool:
        return self.source == ExplanationSource.GENERATED


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusSummary(_CamelModel):
    flight_number: str = ""
    route: str = ""
    disruption_type: DisruptionType = DisruptionType.UNKNOWN
    delay_minutes: Optional[int] = None
    scheduled_departure_local: Optional[str] = None
    actual_departure_local: Optional[str] = None
    scheduled_arrival_local: Optional[str] = None
    estimated_arrival_local: Optional[str] = None
    source: Provenance = Provenance.UNVERIFIED


class EligibilitySummary(_CamelModel):
    label: EligibilityLabel = EligibilityLabel.UNKNOWN
    kind: str = Field(default="mixed", alias="type")
    summary: str = ""


class DisruptionResponse(_CamelModel):
    """
    Externally visible result

    options, messages and hotels are placeholders that are always empty.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "status": {
                    "flightNumber": "IB6312",
                    "route": "Madrid → Bogota",
                    "disruptionType": "delay",
                    "delayMinutes": 200,
                    "scheduledDepartureLocal": "2026-03-01 10:00+01:00",
                    "actualDepartureLocal": "2026-03-01 13:20+01:00",
                    "scheduledArrivalLocal": "2026-03-01 16:30-05:00",
                    "estimatedArrivalLocal": "2026-03-01 19:50-05:00",
                    "source": "verified"
                },
                "eligibility": {
                    "label": "Maybe",
                    "type": "mixed",
                    "summary": "Long delays of three hours or more may qualify for compensation or care, depending on the cause and the jurisdiction."
                },
                "explanation": "Your Iberia flight was delayed by about 3 hours...",
                "options": [],
                "messages": [],
                "hotels": []
            }
        }
    )

    status: StatusSummary
    eligibility: EligibilitySummary
    explanation: str
    options: List[Any] = Field(default_factory=list)
    messages: List[Any] = Field(default_factory=list)
    hotels: List[Any] = Field(default_factory=list)
