"""
Models package - Pydantic schemas for data validation
"""

from .flight import (
    DisruptionType,
    VerifiedStatus,
    parse_aerodatabox_response
)
from .query import (
    FlightQuery,
    IssueType
)
from .disruption import (
    DisruptionFacts,
    DisruptionResponse,
    Eligibility,
    EligibilityLabel,
    EligibilitySummary,
    ExplanationResult,
    ExplanationSource,
    Provenance,
    StatusSummary
)

__all__ = [
    "DisruptionType",
    "VerifiedStatus",
    "parse_aerodatabox_response",
    "FlightQuery",
    "IssueType",
    "DisruptionFacts",
    "DisruptionResponse",
    "Eligibility",
    "EligibilityLabel",
    "EligibilitySummary",
    "ExplanationResult",
    "ExplanationSource",
    "Provenance",
    "StatusSummary"
]
