"""Shared fixtures for the support assistant tests."""

import random
import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from support_engine.matcher import ResponseMatcher


SAMPLE_CSV = (
    "prompt,completion\n"
    '"Hello, friend","He said ""hi"""\n'
    "onlyonefield\n"
    ",empty prompt\n"
    "\n"
    '"I feel sad",Talk to someone\n'
)


@pytest.fixture
def matcher():
    """Matcher with the built-in records and a seeded random source."""
    m = ResponseMatcher(rng=random.Random(1234))
    yield m
    m.close()


@pytest.fixture
def sample_csv():
    return SAMPLE_CSV
