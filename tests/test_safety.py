"""
Crisis triage tests.

Run:
  pytest tests/test_safety.py -v
"""

import logging
import random

import pytest

from config import CRISIS_RESPONSES
from support_engine.safety import (
    CRISIS_PHRASES,
    check_crisis,
    is_crisis,
    pick_crisis_response,
)


class TestCheckCrisis:

    @pytest.mark.parametrize("phrase", CRISIS_PHRASES)
    def test_every_phrase_triggers(self, phrase):
        result = check_crisis(f"lately I think about {phrase.upper()} a lot")
        assert result is not None
        assert result.matched_phrase == phrase

    def test_reports_first_matching_phrase(self):
        assert check_crisis("I want to end it all").matched_phrase == "end it all"

    def test_false_positive_is_accepted(self):
        """Idioms still trigger; missing a real crisis is worse."""
        assert is_crisis("I'm scared to death of exams")

    def test_safe_text(self):
        assert check_crisis("How can I sleep better?") is None
        assert not is_crisis("")

    def test_log_does_not_contain_user_text(self, caplog):
        with caplog.at_level(logging.WARNING):
            check_crisis("my secret diary says suicide")
        assert "suicide" in caplog.text
        assert "diary" not in caplog.text


class TestPickCrisisResponse:

    def test_returns_pool_member(self):
        rng = random.Random(0)
        for _ in range(20):
            assert pick_crisis_response(rng) in CRISIS_RESPONSES

    def test_seeded_rng_is_reproducible(self):
        first = [pick_crisis_response(random.Random(5)) for _ in range(3)]
        second = [pick_crisis_response(random.Random(5)) for _ in range(3)]
        assert first == second
