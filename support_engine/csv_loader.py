"""
support_engine/csv_loader.py - CSV Dataset Ingestion
=====================================================

Turns a prompt/response CSV export (for example the
reddit_text-davinci-002.csv dataset) into CorpusRecord objects.

Format:
- The first line is a header and is discarded
- Fields are comma-separated; a double quote toggles quoted mode,
  "" inside quotes is a literal quote, commas inside quotes are text
- Field 1 is the prompt, field 2 the response, the rest is ignored
- Each physical line is one row (no newlines inside quoted fields)

Bad rows never abort a batch: they are skipped and reported as
ParseWarning entries with their 1-based line number.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import requests

from config import BASE_DIR, REQUEST_TIMEOUT
from support_engine.corpus import CorpusRecord

logger = logging.getLogger(__name__)


# =============================================================================
# RESULT TYPES
# =============================================================================

@dataclass(frozen=True)
class ParseWarning:
    """A skipped CSV row."""
    line_number: int
    reason: str
    raw: str


@dataclass
class ParseResult:
    """Records accepted from one CSV text, plus the rows that were skipped."""
    records: list[CorpusRecord] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)


@dataclass
class IngestionResult:
    """
    Outcome of loading a dataset into the assistant.

    Attributes:
        status: "loaded" (records added), "empty" (source read but no
            usable rows) or "failed" (source could not be read)
        source: Path, URL or "<content>" for in-memory text
        records_added: Number of records appended to the corpus
        warnings: Rows skipped while parsing
        error: Why the source could not be read (status "failed" only)
        stats: Batch statistics, see batch_stats()
    """
    status: str
    source: str
    records_added: int = 0
    warnings: list[ParseWarning] = field(default_factory=list)
    error: Optional[str] = None
    stats: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "loaded"


# =============================================================================
# LINE AND CONTENT PARSING
# =============================================================================

def parse_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into fields, honoring double-quote quoting.

    Example:
        >>> parse_csv_line('"Hi, there",x')
        ['Hi, there', 'x']
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                # Escaped quote
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


def parse_csv_content(csv_content: str) -> ParseResult:
    """
    Parse a whole CSV text into corpus records.

    Args:
        csv_content: Raw CSV text including its header line

    Returns:
        ParseResult with records in input order and one warning per
        skipped row
    """
    result = ParseResult()
    lines = csv_content.splitlines()

    # Skip header row
    for index in range(1, len(lines)):
        line = lines[index].strip()
        if not line:
            continue

        line_number = index + 1
        fields = parse_csv_line(line)
        if len(fields) < 2:
            reason = "expected at least 2 fields"
        else:
            prompt, response = fields[0].strip(), fields[1].strip()
            if prompt and response:
                result.records.append(CorpusRecord.from_pair(prompt, response))
                continue
            reason = "empty prompt or response"

        logger.warning("Skipping CSV line %d: %s", line_number, reason)
        result.warnings.append(ParseWarning(line_number, reason, line))

    return result


def batch_stats(records: list[CorpusRecord]) -> dict:
    """Record count, per-category counts and mean keyword count for a batch."""
    total = len(records)
    categories = Counter(r.category for r in records)
    average = sum(len(r.keywords) for r in records) / total if total else 0.0
    return {
        "total_responses": total,
        "categories": dict(categories),
        "average_keywords_per_response": average,
    }


# =============================================================================
# SOURCE LOADING
# =============================================================================

def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def resolve_path(source: Union[str, Path]) -> Path:
    """Absolute path for a file source; relative paths hang off the project root."""
    path = Path(source)
    if not path.is_absolute():
        path = BASE_DIR / path
    return path.resolve()


def read_source(source: Union[str, Path], timeout: int = REQUEST_TIMEOUT) -> str:
    """
    Read UTF-8 CSV text from a file path or an http(s) URL.

    Relative paths are resolved against the project root.

    Raises:
        OSError: File missing or unreadable
        UnicodeDecodeError: File is not valid UTF-8
        requests.RequestException: Remote source unreachable or non-2xx
    """
    source = str(source)
    if is_url(source):
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
        response.encoding = "utf-8"
        return response.text

    return resolve_path(source).read_text(encoding="utf-8")
