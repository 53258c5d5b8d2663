"""
Services package - Business logic and external API integrations
"""

from .aerodatabox import AeroDataBoxClient, AeroDataBoxAPIError, get_aerodatabox_client
from .assembler import assemble_response
from .eligibility import classify
from .explanation import ExplanationGate
from .gemini import GeminiExplanationService, ExplanationProviderError, get_gemini_service
from .helper import DisruptionHelperService, get_disruption_helper_service
from .reconciler import StatusReconciler

__all__ = [
    "AeroDataBoxClient",
    "AeroDataBoxAPIError",
    "get_aerodatabox_client",
    "assemble_response",
    "classify",
    "ExplanationGate",
    "GeminiExplanationService",
    "ExplanationProviderError",
    "get_gemini_service",
    "DisruptionHelperService",
    "get_disruption_helper_service",
    "StatusReconciler"
]
