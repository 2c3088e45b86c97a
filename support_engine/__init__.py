"""
support_engine/ - Response matching and crisis triage for the support assistant
================================================================================

This package contains the main components:
- keywords.py: Keyword extraction and categorization
- safety.py: Crisis phrase detection
- corpus.py: Corpus records and the append-only response corpus
- csv_loader.py: CSV dataset parsing and source loading
- matcher.py: The response matching engine that ties everything together
"""

from .corpus import CorpusRecord, ResponseCorpus, SAMPLE_RECORDS
from .csv_loader import IngestionResult, ParseWarning, parse_csv_content
from .matcher import ResponseMatcher, calculate_similarity

__all__ = [
    "CorpusRecord",
    "ResponseCorpus",
    "SAMPLE_RECORDS",
    "IngestionResult",
    "ParseWarning",
    "parse_csv_content",
    "ResponseMatcher",
    "calculate_similarity",
]
