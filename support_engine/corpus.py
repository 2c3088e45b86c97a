"""
support_engine/corpus.py - Corpus Records and the Response Corpus
==================================================================

A CorpusRecord is one authored prompt/response pair together with the
keywords and category derived from its prompt. The ResponseCorpus is
the append-only collection the matcher scores against.

Concurrency: readers take an immutable tuple snapshot without locking;
writers build a new tuple under a lock and swap it in. A query therefore
always sees some prefix of the completed appends, never a torn record.
"""

import threading
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from support_engine.keywords import categorize_prompt, extract_domain_keywords

CATEGORIES = frozenset({
    "depression", "anxiety", "relationship", "therapy",
    "loneliness", "crisis", "general",
})


# =============================================================================
# DATA STRUCTURES
# =============================================================================

@dataclass(frozen=True)
class CorpusRecord:
    """
    One authored prompt/response pair.

    Attributes:
        prompt: Example user utterance the response was written for
        response: Text returned verbatim when this record is selected
        keywords: Lowercase tokens used for similarity scoring
        category: One of CATEGORIES
    """
    prompt: str
    response: str
    keywords: frozenset = field(default_factory=frozenset)
    category: str = "general"

    def __post_init__(self):
        if not self.prompt.strip():
            raise ValueError("CorpusRecord prompt must not be empty")
        if not self.response.strip():
            raise ValueError("CorpusRecord response must not be empty")
        if self.category not in CATEGORIES:
            raise ValueError(
                f"Unknown category {self.category!r}; "
                f"expected one of {sorted(CATEGORIES)}"
            )
        # Accept any iterable of keywords but store them normalized
        object.__setattr__(
            self, "keywords", frozenset(k.lower() for k in self.keywords if k.strip())
        )

    @classmethod
    def from_pair(cls, prompt: str, response: str) -> "CorpusRecord":
        """Build a record, deriving keywords and category from the prompt."""
        prompt = prompt.strip()
        return cls(
            prompt=prompt,
            response=response.strip(),
            keywords=frozenset(extract_domain_keywords(prompt)),
            category=categorize_prompt(prompt),
        )

    def __repr__(self):
        preview = self.prompt[:50] + "..." if len(self.prompt) > 50 else self.prompt
        return f"CorpusRecord(category={self.category}, prompt='{preview}')"


# Built-in records so the assistant can answer before any dataset loads
SAMPLE_RECORDS = (
    CorpusRecord(
        prompt="I feel so alone. I have so many people around me, but it seems as they just listen and dont understand.",
        response="There could be many reasons why you feel alone, even though you have people around you. Perhaps you don't feel like you can really confide in anyone, or that people don't really understand you. It's possible that you feel like your friends and family are there for you in theory, but not in practice. Whatever the reason, it's important to reach out to someone you trust and talk about how you're feeling. Maybe there's something they can do to help, or maybe just talking about it will make you feel better.",
        keywords=frozenset({"alone", "lonely", "people", "understand", "friends", "family"}),
        category="loneliness",
    ),
    CorpusRecord(
        prompt="I can't seem to feel any emotion except anxiety, not even for myself.",
        response="It is possible that you are experiencing symptoms of an anxiety disorder. Anxiety disorders are the most common type of mental illness, and they can make it difficult to cope with everyday life. Symptoms of anxiety can include feeling restless, irritable, and easily fatigued; having difficulty concentrating; and experiencing muscle tension and sleep disturbances. If you are experiencing these symptoms, it is important to talk to a mental health professional.",
        keywords=frozenset({"anxiety", "emotion", "anxiety disorder", "mental illness", "symptoms"}),
        category="anxiety",
    ),
    CorpusRecord(
        prompt="do i need a therapist",
        response="There is no one-size-fits-all answer to this question, as the need for a therapist depends on a variety of individual factors. However, if you are struggling with mental health issues or experiencing difficulty coping with life stressors, seeking professional help may be beneficial. A therapist can provide support and guidance as you work through your challenges, and can also offer coping and problem-solving strategies that can help you improve your overall well-being.",
        keywords=frozenset({"therapist", "therapy", "mental health", "professional help", "counselor"}),
        category="therapy",
    ),
)


# =============================================================================
# RESPONSE CORPUS
# =============================================================================

class ResponseCorpus:
    """
    Append-only, ordered collection of CorpusRecord objects.

    The corpus never shrinks and never deduplicates. It lives only in
    memory and is rebuilt from the seed set on every process start.
    """

    def __init__(self, seed: Optional[Iterable[CorpusRecord]] = None):
        self._records: tuple = tuple(seed or ())
        self._lock = threading.Lock()

    def append(self, record: CorpusRecord) -> None:
        """Add one record at the end."""
        with self._lock:
            self._records = self._records + (record,)

    def extend(self, records: Iterable[CorpusRecord]) -> int:
        """Add a batch of records in order; returns how many were added."""
        batch = tuple(records)
        if batch:
            with self._lock:
                self._records = self._records + batch
        return len(batch)

    def snapshot(self) -> tuple:
        """Current records as an immutable tuple."""
        return self._records

    def categories(self) -> list[str]:
        """Distinct record categories in first-seen order."""
        return list(dict.fromkeys(r.category for r in self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CorpusRecord]:
        return iter(self._records)
