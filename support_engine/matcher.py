"""
support_engine/matcher.py - Response Matching Engine
=====================================================

This module provides the main API for the assistant. The HTTP backend
(or any other UI) should ONLY talk to a ResponseMatcher instance.

The key method is `get_response()` which:
1. Checks for crisis language -> returns a crisis-resource message
2. Scores the input against every record in the corpus
3. Returns the best record's response if it clears MATCH_THRESHOLD
4. Otherwise returns a generic supportive fallback message

Dataset loading is decoupled from querying: the matcher answers from
its seed records immediately and picks up new records as soon as an
ingestion batch has been appended.
"""

import logging
import random
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

import requests

from config import (
    EXACT_MATCH_BONUS,
    FALLBACK_RESPONSES,
    KEYWORD_WEIGHT,
    MATCH_THRESHOLD,
)
from support_engine.corpus import SAMPLE_RECORDS, CorpusRecord, ResponseCorpus
from support_engine.csv_loader import (
    IngestionResult,
    batch_stats,
    parse_csv_content,
    read_source,
)
from support_engine.keywords import categorize_input, extract_keywords
from support_engine.safety import check_crisis, pick_crisis_response

logger = logging.getLogger(__name__)


# =============================================================================
# SIMILARITY SCORING
# =============================================================================

def calculate_similarity(user_input: str, record: CorpusRecord) -> float:
    """
    Score how well a corpus record matches the user's input.

    Two parts are added together:
    - keyword overlap: input keywords that fuzzily match (substring
      either way) any record keyword, divided by the larger of the two
      keyword counts, weighted by KEYWORD_WEIGHT
    - exact bonus: EXACT_MATCH_BONUS when the lowercased input contains
      the lowercased prompt or the other way round

    The result is roughly in [0, 1] and is not clamped.
    """
    user_keywords = extract_keywords(user_input)
    record_keywords = record.keywords

    common = sum(
        1 for word in user_keywords
        if any(rk in word or word in rk for rk in record_keywords)
    )
    denominator = max(len(user_keywords), len(record_keywords)) or 1
    keyword_score = common / denominator * KEYWORD_WEIGHT

    lowered_input = user_input.lower()
    lowered_prompt = record.prompt.lower()
    exact_match = lowered_prompt in lowered_input or lowered_input in lowered_prompt
    exact_score = EXACT_MATCH_BONUS if exact_match else 0.0

    return keyword_score + exact_score


@dataclass(frozen=True)
class MatchResult:
    """Best-scoring record for an input (record is None for an empty corpus)."""
    record: Optional[CorpusRecord]
    score: float

    @property
    def is_match(self) -> bool:
        return self.record is not None and self.score > MATCH_THRESHOLD


# =============================================================================
# MATCHING ENGINE
# =============================================================================

class ResponseMatcher:
    """
    Dataset-driven response matcher with crisis triage.

    Usage:
        matcher = ResponseMatcher()
        matcher.load_dataset("data/reddit_text-davinci-002.csv")
        reply = matcher.get_response("do i need a therapist")

    Args:
        rng: Random source for crisis/fallback selection. Pass a seeded
            random.Random for reproducible output.
        seed_records: Records available before any dataset is loaded
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed_records: Iterable[CorpusRecord] = SAMPLE_RECORDS,
    ):
        self._rng = rng or random.Random()
        self._corpus = ResponseCorpus(seed_records)
        self._loaded_records: list[CorpusRecord] = []
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def corpus(self) -> ResponseCorpus:
        return self._corpus

    @property
    def is_loaded(self) -> bool:
        """Always True: the seed records are in place once __init__ returns."""
        return True

    # -------------------------------------------------------------------------
    # Querying
    # -------------------------------------------------------------------------

    def find_best_match(self, user_input: str) -> MatchResult:
        """Highest-scoring record; on ties the earlier record wins."""
        best_record = None
        best_score = 0.0

        for record in self._corpus.snapshot():
            score = calculate_similarity(user_input, record)
            if score > best_score:
                best_score = score
                best_record = record

        return MatchResult(record=best_record, score=best_score)

    def get_response(self, user_input: str) -> str:
        """
        Return one supportive response for the user's message.

        Never raises and never returns an empty string.
        """
        text = "" if user_input is None else str(user_input)

        # Crisis check always runs first
        if check_crisis(text) is not None:
            return pick_crisis_response(self._rng)

        try:
            match = self.find_best_match(text)
        except Exception:
            logger.exception("Scoring failed, using fallback response")
            match = MatchResult(record=None, score=0.0)

        if match.is_match:
            logger.debug("Matched %r with score %.3f", match.record, match.score)
            return match.record.response

        # Computed for diagnostics only; the fallback pool is shared by all
        # categories.
        category = categorize_input(text)
        logger.debug("No match (best %.3f), category=%s", match.score, category)
        return self._rng.choice(FALLBACK_RESPONSES)

    # -------------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------------

    def add_response(self, record: CorpusRecord) -> None:
        """Append a single record to the corpus."""
        self._corpus.append(record)

    def add_responses(self, records: Iterable[CorpusRecord]) -> int:
        """Append a batch of records; returns how many were added."""
        return self._corpus.extend(records)

    def get_stats(self) -> dict:
        return {
            "totalResponses": len(self._corpus),
            "categories": self._corpus.categories(),
            "isLoaded": self.is_loaded,
        }

    def get_sample_responses(self, count: int = 5) -> list[CorpusRecord]:
        """First `count` records that came from loaded datasets."""
        return self._loaded_records[:count]

    # -------------------------------------------------------------------------
    # Dataset ingestion
    # -------------------------------------------------------------------------

    def load_from_content(self, csv_content: str, source: str = "<content>") -> IngestionResult:
        """Parse CSV text and append its records to the corpus."""
        parsed = parse_csv_content(csv_content)
        stats = batch_stats(parsed.records)

        if not parsed.records:
            logger.warning("No responses loaded from %s", source)
            return IngestionResult(
                status="empty",
                source=source,
                warnings=parsed.warnings,
                stats=stats,
            )

        added = self.add_responses(parsed.records)
        self._loaded_records.extend(parsed.records)
        logger.info(
            "Loaded %d responses from %s (%d rows skipped)",
            added, source, len(parsed.warnings),
        )
        return IngestionResult(
            status="loaded",
            source=source,
            records_added=added,
            warnings=parsed.warnings,
            stats=stats,
        )

    def load_dataset(self, source: Union[str, Path]) -> IngestionResult:
        """
        Load a CSV dataset from a file path or URL.

        A source that cannot be read leaves the corpus untouched and
        yields an IngestionResult with status "failed".
        """
        source = str(source)
        try:
            content = read_source(source)
        except (OSError, UnicodeDecodeError, requests.RequestException) as e:
            logger.warning("Could not load dataset from %s: %s", source, e)
            return IngestionResult(status="failed", source=source, error=str(e))

        return self.load_from_content(content, source=source)

    def load_dataset_in_background(self, source: Union[str, Path]) -> "Future[IngestionResult]":
        """
        Start load_dataset() on a worker thread.

        Queries keep being answered from the current corpus while the
        load runs; new records become visible once the batch is appended.
        """
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dataset-loader")
        return self._executor.submit(self.load_dataset, source)

    def close(self) -> None:
        """Wait for background loads to finish and release the worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
