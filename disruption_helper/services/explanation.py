"""
Explanation Gate - decides whether and how a generated explanation is allowed

Generation is permitted only for verified facts, or for declared facts with a
prompt that discloses they are unverified. A flight the provider could not
find, or could not look up, never reaches the generator.
"""

import logging
from typing import Any, Dict, Optional, Protocol

from disruption_helper.models.disruption import (
    DisruptionFacts,
    Eligibility,
    ExplanationResult,
    ExplanationSource,
    Provenance,
)
from disruption_helper.models.query import FlightQuery
from disruption_helper.prompts.manager import PromptManager

logger = logging.getLogger(__name__)


VERIFIED_PROMPT = "explanation_verified"
UNVERIFIED_PROMPT = "explanation_unverified"

UNVERIFIED_DISCLOSURE = (
    "This information is based only on the details you entered and has not been "
    "verified against live flight data."
)

NOT_FOUND_TEXT = (
    "We could not locate this flight in live flight data, so no detailed explanation "
    "has been produced to avoid giving guidance based on unverified details. Please "
    "double-check the flight number and date, or contact your airline directly."
)
PROVIDER_ERROR_TEXT = (
    "We could not reach the flight status service to verify this flight, so no "
    "detailed explanation has been produced. Please try again later or contact your "
    "airline directly."
)
NO_VERIFICATION_NO_GENERATOR_TEXT = (
    "We can't verify your flight status or generate a detailed explanation right now. "
    "Please check your airline's website or contact them directly about rebooking, "
    "refund and compensation options."
)
DEFAULT_FALLBACK_TEXT = (
    "We don't have enough verified information to explain your options. Please "
    "contact your airline directly."
)


def verified_fallback_text(airline: str) -> str:
    """Fixed sentence for verified facts when generation is unavailable"""
    owner = f"{airline}'s" if airline else "your airline's"
    return (
        "Your flight status was verified, but a detailed explanation is not available "
        f"right now. Please check {owner} website or app for the latest rebooking, "
        "refund and compensation options."
    )


class ExplanationProvider(Protocol):
    def complete(self, prompt: str, system_instruction: Optional[str] = None, **kwargs: Any) -> str:
        """Return generated text; raise on failure."""


class ExplanationGate:
    """
    Provenance x generator-availability state machine

    | provenance      | generator | action                               |
    |-----------------|-----------|--------------------------------------|
    | verified        | yes       | generate, verified prompt            |
    | verified        | no        | verified fallback sentence           |
    | not_found       | any       | fixed not-found sentence             |
    | provider_error  | any       | fixed unreachable sentence           |
    | no_provider     | yes       | generate, unverified-disclosure      |
    | no_provider     | no        | cannot verify, cannot generate       |
    | anything else   | any       | generic fallback                     |
    """

    def __init__(
        self,
        generator: Optional[ExplanationProvider] = None,
        prompt_manager: Optional[PromptManager] = None
    ):
        self.generator = generator
        self.prompt_manager = prompt_manager or PromptManager()

    @property
    def generator_available(self) -> bool:
        return self.generator is not None

    def explain(
        self,
        query: FlightQuery,
        facts: DisruptionFacts,
        eligibility: Eligibility
    ) -> ExplanationResult:
        provenance = facts.provenance

        if provenance == Provenance.VERIFIED:
            fallback = verified_fallback_text(query.airline)
            if not self.generator_available:
                return _fallback(fallback)
            return self._generate(VERIFIED_PROMPT, query, facts, eligibility, fallback)

        if provenance == Provenance.NOT_FOUND:
            return _fallback(NOT_FOUND_TEXT)

        if provenance == Provenance.PROVIDER_ERROR:
            return _fallback(PROVIDER_ERROR_TEXT)

        if provenance == Provenance.NO_PROVIDER:
            if not self.generator_available:
                return _fallback(NO_VERIFICATION_NO_GENERATOR_TEXT)
            result = self._generate(
                UNVERIFIED_PROMPT, query, facts, eligibility, NO_VERIFICATION_NO_GENERATOR_TEXT
            )
            if result.generated:
                return ExplanationResult(
                    text=_with_disclosure(result.text),
                    source=ExplanationSource.GENERATED
                )
            return result

        return _fallback(DEFAULT_FALLBACK_TEXT)

    def _generate(
        self,
        config_name: str,
        query: FlightQuery,
        facts: DisruptionFacts,
        eligibility: Eligibility,
        fallback_text: str
    ) -> ExplanationResult:
        variables = _prompt_variables(query, facts, eligibility)
        try:
            is_valid, missing = self.prompt_manager.validate_variables(config_name, variables)
            if not is_valid:
                logger.error(f"Prompt config '{config_name}' expects unknown variables: {', '.join(missing)}")
                return _fallback(fallback_text)
            prompt_data = self.prompt_manager.format_prompt(config_name, variables)
        except (OSError, ValueError) as e:
            logger.error(f"Prompt config '{config_name}' unusable: {str(e)}")
            return _fallback(fallback_text)

        parameters = prompt_data['parameters']
        try:
            text = self.generator.complete(
                prompt_data['prompt'],
                system_instruction=prompt_data['system_instruction'],
                model_name=prompt_data['model_name'],
                temperature=parameters.get('temperature'),
                max_output_tokens=parameters.get('max_output_tokens')
            )
        except Exception as e:
            logger.warning(f"Explanation generation failed, using fallback: {str(e)}")
            return _fallback(fallback_text)

        if not isinstance(text, str) or not text.strip():
            logger.warning("Explanation generator returned no text, using fallback")
            return _fallback(fallback_text)

        return ExplanationResult(text=text.strip(), source=ExplanationSource.GENERATED)


def _fallback(text: str) -> ExplanationResult:
    return ExplanationResult(text=text, source=ExplanationSource.FALLBACK)


def _with_disclosure(text: str) -> str:
    """Make sure unverified explanations open with the disclosure sentence"""
    if text.startswith(UNVERIFIED_DISCLOSURE):
        return text
    return f"{UNVERIFIED_DISCLOSURE} {text}"


def _prompt_variables(
    query: FlightQuery,
    facts: DisruptionFacts,
    eligibility: Eligibility
) -> Dict[str, Any]:
    variables = query.prompt_context()
    variables.update({
        "disruption_type": facts.disruption_type.value,
        "delay_minutes": facts.delay_minutes if facts.delay_minutes is not None else "unknown",
        "eligibility_label": eligibility.label.value,
        "eligibility_summary": eligibility.summary,
        "disclosure": UNVERIFIED_DISCLOSURE,
    })
    if facts.is_verified:
        variables.update({
            "scheduled_departure": facts.scheduled_departure_local,
            "actual_departure": facts.actual_departure_local,
            "scheduled_arrival": facts.scheduled_arrival_local,
            "estimated_arrival": facts.estimated_arrival_local,
        })
    return variables
