"""
CSV ingestion tests.

Run:
  pytest tests/test_csv_loader.py -v
"""

import doctest
import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from config import BASE_DIR
from support_engine import csv_loader, keywords, safety
from support_engine.csv_loader import (
    batch_stats,
    parse_csv_content,
    parse_csv_line,
    read_source,
    resolve_path,
)


class TestParseCsvLine:

    def test_plain_fields(self):
        assert parse_csv_line("a,b,c") == ["a", "b", "c"]

    def test_comma_inside_quotes(self):
        assert parse_csv_line('"a, b",c') == ["a, b", "c"]

    def test_escaped_quote(self):
        assert parse_csv_line('"He said ""hi""",x') == ['He said "hi"', "x"]

    def test_single_field(self):
        assert parse_csv_line("lonely") == ["lonely"]

    def test_trailing_comma_gives_empty_field(self):
        assert parse_csv_line("a,") == ["a", ""]


class TestParseCsvContent:

    def test_header_is_discarded(self):
        result = parse_csv_content("prompt,completion\nI feel sad,Talk to someone")
        assert len(result.records) == 1
        assert result.records[0].prompt == "I feel sad"

    def test_bad_rows_skipped_with_line_numbers(self, sample_csv):
        result = parse_csv_content(sample_csv)
        assert [r.prompt for r in result.records] == ["Hello, friend", "I feel sad"]
        assert [w.line_number for w in result.warnings] == [3, 4]
        assert result.warnings[0].raw == "onlyonefield"

    def test_escaped_quote_round_trips(self, sample_csv):
        result = parse_csv_content(sample_csv)
        assert result.records[0].response == 'He said "hi"'

    def test_records_get_keywords_and_category(self, sample_csv):
        first, second = parse_csv_content(sample_csv).records
        assert first.keywords == frozenset({"friend"})
        assert second.category == "depression"

    def test_extra_fields_ignored(self):
        result = parse_csv_content("h\n a , b ,c,d\n")
        assert (result.records[0].prompt, result.records[0].response) == ("a", "b")

    def test_whitespace_only_response_skipped(self):
        result = parse_csv_content('h\nprompt,"   "\n')
        assert result.records == []
        assert result.warnings[0].reason == "empty prompt or response"

    def test_windows_line_endings(self):
        result = parse_csv_content("h\r\nI feel sad,ok\r\n")
        assert result.records[0].response == "ok"

    def test_carriage_return_only_line_endings(self):
        result = parse_csv_content("h\rI feel sad,ok\rI feel down,ok2\r")
        assert [r.response for r in result.records] == ["ok", "ok2"]

    def test_empty_and_header_only(self):
        assert parse_csv_content("").records == []
        assert parse_csv_content("prompt,completion\n").records == []

    def test_warnings_are_logged(self, sample_csv, caplog):
        with caplog.at_level(logging.WARNING):
            parse_csv_content(sample_csv)
        assert "line 3" in caplog.text
        assert "line 4" in caplog.text


class TestBatchStats:

    def test_stats(self, sample_csv):
        stats = batch_stats(parse_csv_content(sample_csv).records)
        assert stats["total_responses"] == 2
        assert stats["categories"] == {"general": 1, "depression": 1}
        # "friend" / "feel", "sad"
        assert stats["average_keywords_per_response"] == pytest.approx(1.5)

    def test_empty_batch(self):
        assert batch_stats([])["average_keywords_per_response"] == 0.0


class TestReadSource:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "data.csv"
        path.write_text("h\nx,y\n", encoding="utf-8")
        assert read_source(path) == "h\nx,y\n"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_source(tmp_path / "missing.csv")

    def test_reads_url(self):
        response = MagicMock(text="h\nx,y\n")
        with patch("support_engine.csv_loader.requests.get", return_value=response) as get:
            assert read_source("https://example.org/data.csv", timeout=5) == "h\nx,y\n"
        get.assert_called_once_with("https://example.org/data.csv", timeout=5)
        response.raise_for_status.assert_called_once()

    def test_url_error_propagates(self):
        with patch("support_engine.csv_loader.requests.get", side_effect=requests.ConnectionError("down")):
            with pytest.raises(requests.RequestException):
                read_source("http://example.org/data.csv")

    def test_relative_path_resolves_under_project_root(self):
        assert resolve_path("data/x.csv") == (BASE_DIR / "data" / "x.csv").resolve()

    def test_parent_segments_are_collapsed(self, tmp_path):
        assert resolve_path(tmp_path / "a" / ".." / "b.csv") == (tmp_path / "b.csv").resolve()


class TestDocstringExamples:
    """Examples in module docstrings stay importable and correct."""

    @pytest.mark.parametrize("module", [csv_loader, keywords, safety])
    def test_examples(self, module):
        failures, tried = doctest.testmod(module)
        assert tried > 0
        assert failures == 0
