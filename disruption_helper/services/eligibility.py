"""
Eligibility Classifier - advisory compensation/support estimate
Pure function of (disruption type, delay minutes); never fails
"""

import math
from typing import Any

from disruption_helper.models.disruption import Eligibility, EligibilityLabel
from disruption_helper.models.flight import DisruptionType


# Policy thresholds in minutes
LONG_DELAY_MINUTES = 180
MODERATE_DELAY_MINUTES = 60

CANCELLATION_SUMMARY = (
    "Cancellations often entitle passengers to rebooking or a refund; "
    "compensation may also apply depending on the cause and the jurisdiction."
)
LONG_DELAY_SUMMARY = (
    "Long delays of three hours or more may qualify for compensation or care, "
    "depending on the cause and the jurisdiction."
)
MODERATE_DELAY_SUMMARY = (
    "Moderate delays may entitle you to meals or other support, "
    "but cash compensation is less common."
)
SHORT_DELAY_SUMMARY = "Short delays rarely qualify for compensation."
UNKNOWN_SUMMARY = (
    "We could not estimate your eligibility from the available information. "
    "Check your airline's conditions of carriage and local passenger-rights rules."
)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def classify(disruption_type: Any, delay_minutes: Any) -> Eligibility:
    """
    Map reconciled facts to an eligibility advisory

    Args:
        disruption_type: DisruptionType or its string value
        delay_minutes: Delay in minutes, or None

    Returns:
        Eligibility with label Unknown, Unlikely or Maybe
    """
    try:
        kind = DisruptionType(disruption_type)
    except (ValueError, TypeError):
        kind = DisruptionType.UNKNOWN

    if kind == DisruptionType.CANCELLATION:
        return Eligibility(label=EligibilityLabel.MAYBE, summary=CANCELLATION_SUMMARY)

    if kind == DisruptionType.DELAY and _is_number(delay_minutes):
        if delay_minutes >= LONG_DELAY_MINUTES:
            return Eligibility(label=EligibilityLabel.MAYBE, summary=LONG_DELAY_SUMMARY)
        if delay_minutes >= MODERATE_DELAY_MINUTES:
            return Eligibility(label=EligibilityLabel.UNLIKELY, summary=MODERATE_DELAY_SUMMARY)
        return Eligibility(label=EligibilityLabel.UNLIKELY, summary=SHORT_DELAY_SUMMARY)

    return Eligibility(label=EligibilityLabel.UNKNOWN, summary=UNKNOWN_SUMMARY)
