"""
config.py - Configuration settings for the wellness support assistant
======================================================================

This file centralizes all configuration values: dataset locations,
matching thresholds, the keyword lexicons used for extraction and
categorization, and the fixed response pools.

Values that differ between environments (dataset location, log level,
network timeout) can be overridden from environment variables or a
.env file. The crisis phrase list is NOT configurable and lives in
support_engine/safety.py.
"""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Base directory (where this file lives)
BASE_DIR = Path(__file__).parent

# Data directories
DATA_DIR = BASE_DIR / "data"

# CSV corpus of prompt/response pairs loaded on top of the built-in seed set.
# Relative paths are resolved against BASE_DIR.
DATASET_PATH = os.getenv("DATASET_PATH", str(DATA_DIR / "reddit_text-davinci-002.csv"))

# Optional remote copy of the dataset (takes precedence when set)
DATASET_URL = os.getenv("DATASET_URL", "")

# Seconds to wait for a remote dataset before giving up
REQUEST_TIMEOUT = int(os.getenv("REQUEST_TIMEOUT", "30"))

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = LOG_LEVEL) -> None:
    """
    Configure the root logger once for scripts and the API.

    Library modules only create loggers; handlers are installed here.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)


# =============================================================================
# MATCHING CONFIGURATION
# =============================================================================

# A corpus record is returned only when its score is strictly above this
MATCH_THRESHOLD = 0.3

# Weight of the fuzzy keyword overlap in the total score
KEYWORD_WEIGHT = 0.7

# Bonus when the input and a record's prompt contain one another
EXACT_MATCH_BONUS = 0.3

# Tokens shorter than this are dropped by the keyword extractor
MIN_KEYWORD_LENGTH = 3

# =============================================================================
# LEXICONS
# =============================================================================

# Vocabulary used to keep only informative keywords on corpus records
DOMAIN_TERMS = (
    "depression", "anxiety", "stress", "therapy", "therapist", "counselor",
    "relationship", "boyfriend", "girlfriend", "partner", "family", "friend",
    "alone", "lonely", "sad", "angry", "frustrated", "confused", "scared",
    "suicidal", "self", "harm", "help", "support", "feel", "feeling",
)

# Query-side keyword families, checked in this order (first hit wins)
MENTAL_HEALTH_KEYWORDS = (
    "depression", "anxiety", "stress", "sad", "down", "hopeless", "worthless",
    "therapy", "therapist", "counselor", "mental health", "suicidal", "self harm",
    "panic", "worry", "fear", "nervous", "overwhelmed", "burnout", "exhausted",
    "lonely", "alone", "isolated", "empty", "numb", "lazy", "unmotivated",
    "sleep", "insomnia", "appetite", "concentration", "memory", "focus",
)

RELATIONSHIP_KEYWORDS = (
    "boyfriend", "girlfriend", "partner", "relationship", "dating", "breakup",
    "cheating", "trust", "jealous", "paranoid", "communication", "fight",
    "argument", "marriage", "divorce", "family", "friend", "social",
)

EMOTIONAL_KEYWORDS = (
    "angry", "mad", "frustrated", "irritated", "upset", "hurt", "betrayed",
    "confused", "lost", "scared", "afraid", "guilty", "shame", "embarrassed",
    "proud", "happy", "excited", "grateful", "loved", "supported",
)

# Record-side category rules, checked in this order (first hit wins)
CATEGORY_RULES = (
    ("depression", ("depression", "sad", "down")),
    ("anxiety", ("anxiety", "worry", "panic")),
    ("relationship", ("relationship", "boyfriend", "girlfriend")),
    ("therapy", ("therapy", "therapist", "counselor")),
    ("loneliness", ("alone", "lonely", "isolated")),
    ("crisis", ("suicidal", "self harm", "kill")),
)

# =============================================================================
# RESPONSE POOLS
# =============================================================================

# Returned when no corpus record scores above MATCH_THRESHOLD
FALLBACK_RESPONSES = (
    "I understand you're going through a difficult time. While I may not have a specific response for your situation, I want you to know that your feelings are valid and important.",
    "Thank you for sharing with me. It takes courage to open up about your struggles. Have you considered speaking with a mental health professional who can provide more personalized support?",
    "I hear you, and I want you to know that you're not alone in this. Many people face similar challenges, and there are resources and people who want to help you through this.",
    "Your feelings matter, and it's okay to not have all the answers right now. Sometimes the most important step is reaching out, which you've already done by talking to me.",
    "I appreciate you trusting me with this. While I may not have the perfect response, I want you to know that seeking help and talking about your feelings is a sign of strength, not weakness.",
)

# Returned whenever crisis language is detected
CRISIS_RESPONSES = (
    "I'm concerned about what you're sharing. If you're having thoughts of self-harm or suicide, please reach out to a crisis helpline immediately. In the US, you can call 988 for the Suicide & Crisis Lifeline.",
    "Your safety is the most important thing right now. If you're in immediate danger, please call emergency services (911) or go to your nearest emergency room.",
    "I want to make sure you're safe. Please consider reaching out to a trusted friend, family member, or mental health professional right away.",
)

# =============================================================================
# DEMO CONFIGURATION
# =============================================================================

# Queries used by scripts/try_queries.py
SAMPLE_QUERIES = (
    "I feel so alone and depressed",
    "My boyfriend and I are having problems",
    "I need help with my anxiety",
    "Should I see a therapist?",
    "I'm having suicidal thoughts",
)
