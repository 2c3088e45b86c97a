"""
support_engine/keywords.py - Keyword Extraction and Categorization
===================================================================

Plain-text heuristics shared by ingestion and matching:

- extract_keywords(): every informative token in a piece of text
  (used on user input, which must not lose information before scoring)
- extract_domain_keywords(): only tokens related to the support
  vocabulary (used once per corpus record at ingestion time)
- categorize_input(): coarse topic of a user message
- categorize_prompt(): category label stored on a corpus record
"""

import re
from typing import Iterable

from config import (
    CATEGORY_RULES,
    DOMAIN_TERMS,
    EMOTIONAL_KEYWORDS,
    MENTAL_HEALTH_KEYWORDS,
    MIN_KEYWORD_LENGTH,
    RELATIONSHIP_KEYWORDS,
)

# Anything that is not a letter, digit or whitespace (underscore included)
_NON_WORD_RE = re.compile(r"[^\w\s]|_")

# Query-side families, in precedence order
INPUT_FAMILIES = (
    ("mental_health", MENTAL_HEALTH_KEYWORDS),
    ("relationship", RELATIONSHIP_KEYWORDS),
    ("emotional", EMOTIONAL_KEYWORDS),
)


def extract_keywords(text: str) -> list[str]:
    """
    Tokenize text into lowercase keywords.

    Punctuation is removed, tokens shorter than MIN_KEYWORD_LENGTH are
    dropped and duplicates are collapsed (first occurrence kept).

    Example:
        >>> extract_keywords("I can't sleep, I can't focus!")
        ['cant', 'sleep', 'focus']
    """
    cleaned = _NON_WORD_RE.sub("", text.lower())
    seen = set()
    keywords = []
    for word in cleaned.split():
        if len(word) < MIN_KEYWORD_LENGTH or word in seen:
            continue
        seen.add(word)
        keywords.append(word)
    return keywords


def _related(word: str, term: str) -> bool:
    """Fuzzy containment: either string is a substring of the other."""
    return term in word or word in term


def extract_domain_keywords(text: str, lexicon: Iterable[str] = DOMAIN_TERMS) -> list[str]:
    """
    Keywords restricted to the support vocabulary.

    A token survives only if it contains, or is contained in, at least
    one lexicon term ("feelings" -> "feel", "the" -> "therapy").
    """
    terms = tuple(lexicon)
    return [
        word for word in extract_keywords(text)
        if any(_related(word, term) for term in terms)
    ]


def categorize_input(text: str) -> str:
    """
    Classify a user message into a coarse topic.

    Families are checked in order, so a message mentioning both
    "anxiety" and "boyfriend" is filed under mental_health.

    Returns:
        "mental_health", "relationship", "emotional" or "general"
    """
    lowered = text.lower()
    for label, family in INPUT_FAMILIES:
        if any(keyword in lowered for keyword in family):
            return label
    return "general"


def categorize_prompt(prompt: str) -> str:
    """Assign a corpus record category from its prompt (defaults to general)."""
    lowered = prompt.lower()
    for category, triggers in CATEGORY_RULES:
        if any(trigger in lowered for trigger in triggers):
            return category
    return "general"
