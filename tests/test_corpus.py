"""
Corpus record and response corpus tests.

Run:
  pytest tests/test_corpus.py -v
"""

import threading

import pytest

from support_engine.corpus import (
    CATEGORIES,
    SAMPLE_RECORDS,
    CorpusRecord,
    ResponseCorpus,
)


class TestCorpusRecord:

    def test_from_pair_derives_keywords_and_category(self):
        record = CorpusRecord.from_pair("  My girlfriend makes me feel lonely ", " Talk it through. ")
        assert record.prompt == "My girlfriend makes me feel lonely"
        assert record.response == "Talk it through."
        assert record.keywords == frozenset({"girlfriend", "feel", "lonely"})
        assert record.category == "relationship"

    def test_keywords_are_normalized(self):
        record = CorpusRecord("p", "r", keywords=["Anxiety", "", "STRESS"])
        assert record.keywords == frozenset({"anxiety", "stress"})

    def test_unknown_category_rejected(self):
        with pytest.raises(ValueError):
            CorpusRecord("p", "r", category="mental_health")

    def test_empty_prompt_or_response_rejected(self):
        with pytest.raises(ValueError):
            CorpusRecord("  ", "r")
        with pytest.raises(ValueError):
            CorpusRecord("p", "")

    def test_default_category_is_general(self):
        assert CorpusRecord("p", "r").category == "general"

    def test_sample_records_are_valid(self):
        assert 3 <= len(SAMPLE_RECORDS) <= 10
        for record in SAMPLE_RECORDS:
            assert record.keywords
            assert record.category in CATEGORIES


class TestResponseCorpus:

    def test_seeded_and_append_only(self):
        corpus = ResponseCorpus(SAMPLE_RECORDS)
        extra = CorpusRecord("p", "r")
        corpus.append(extra)
        corpus.append(extra)
        assert len(corpus) == len(SAMPLE_RECORDS) + 2
        assert list(corpus)[-2:] == [extra, extra]

    def test_extend_preserves_order(self):
        corpus = ResponseCorpus()
        batch = [CorpusRecord(f"p{i}", f"r{i}") for i in range(3)]
        assert corpus.extend(batch) == 3
        assert [r.prompt for r in corpus] == ["p0", "p1", "p2"]
        assert corpus.extend([]) == 0

    def test_snapshot_is_unaffected_by_later_appends(self):
        corpus = ResponseCorpus(SAMPLE_RECORDS)
        before = corpus.snapshot()
        corpus.append(CorpusRecord("p", "r"))
        assert len(before) == len(SAMPLE_RECORDS)
        assert len(corpus.snapshot()) == len(SAMPLE_RECORDS) + 1

    def test_categories_first_seen_order(self):
        corpus = ResponseCorpus(SAMPLE_RECORDS)
        corpus.append(CorpusRecord("p", "r", category="anxiety"))
        assert corpus.categories() == ["loneliness", "anxiety", "therapy"]

    def test_concurrent_appends_are_not_lost(self):
        corpus = ResponseCorpus()

        def worker(n):
            for i in range(200):
                corpus.append(CorpusRecord(f"{n}-{i}", "r"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(corpus) == 800
