"""
support_engine/safety.py - Crisis Triage
=========================================

This module implements the keyword-based crisis check that runs before
any response matching. If a user message contains one of the phrases
below, the assistant answers with a fixed crisis-resource message
instead of anything from the corpus.

The phrase list is deliberately broad and is not configurable:
"I'm scared to death of exams" triggers it, and that is accepted.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from config import CRISIS_RESPONSES

logger = logging.getLogger(__name__)


# =============================================================================
# CRISIS PHRASES
# =============================================================================

CRISIS_PHRASES = (
    "suicide",
    "kill myself",
    "end it all",
    "not worth living",
    "self harm",
    "cut myself",
    "hurt myself",
    "die",
    "death",
)


@dataclass(frozen=True)
class TriageResult:
    """
    Structured result from the crisis check.

    Attributes:
        matched_phrase: The phrase that triggered the triage (for logging)
    """
    matched_phrase: str


# =============================================================================
# MAIN TRIAGE FUNCTION
# =============================================================================

def check_crisis(user_text: str) -> Optional[TriageResult]:
    """
    Check user input for self-harm or suicide indicators.

    Matching is a case-insensitive substring test, so "DIE" and
    "diet" both match "die".

    Args:
        user_text: The raw text input from the user

    Returns:
        TriageResult if crisis language was found, None otherwise

    Example:
        >>> check_crisis("I want to end it all").matched_phrase
        'end it all'
        >>> check_crisis("How do I sleep better?") is None
        True
    """
    normalized = user_text.lower()

    for phrase in CRISIS_PHRASES:
        if phrase in normalized:
            # Never log the user's message itself
            logger.warning("Crisis phrase detected: %r", phrase)
            return TriageResult(matched_phrase=phrase)

    return None


def is_crisis(user_text: str) -> bool:
    """True if the text contains any crisis phrase."""
    return check_crisis(user_text) is not None


def pick_crisis_response(rng: random.Random) -> str:
    """Choose one crisis-resource message uniformly at random."""
    return rng.choice(CRISIS_RESPONSES)
