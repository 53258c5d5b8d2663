"""
Prompts package - Manages AI prompt configurations
"""

from .manager import PromptManager

__all__ = [
    "PromptManager"
]
