"""Fake collaborators standing in for AeroDataBox and Gemini."""

from typing import List, Optional

from disruption_helper.models.flight import VerifiedStatus


class FakeStatusClient:
    """Status provider double: returns a fixed status or raises."""

    def __init__(self, status: Optional[VerifiedStatus] = None, error: Optional[Exception] = None):
        self.status = status
        self.error = error
        self.calls: List[tuple] = []

    def lookup(self, flight_number: str, date: str) -> Optional[VerifiedStatus]:
        self.calls.append((flight_number, date))
        if self.error is not None:
            raise self.error
        return self.status


class FakeGenerator:
    """Generator double recording every prompt it receives."""

    def __init__(self, text: str = "Your flight may qualify for support.", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []
        self.system_instructions: List[Optional[str]] = []
        self.options: List[dict] = []

    def complete(self, prompt: str, system_instruction: Optional[str] = None, **kwargs) -> str:
        self.prompts.append(prompt)
        self.system_instructions.append(system_instruction)
        self.options.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.text
