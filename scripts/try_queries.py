#!/usr/bin/env python3
"""
scripts/try_queries.py - Run Sample Queries Against the Assistant
==================================================================

Loads the configured dataset (if present) and prints the response the
assistant gives to a handful of typical messages, including one that
must be routed to crisis resources.

Usage:
    python scripts/try_queries.py
    python scripts/try_queries.py "I can't stop worrying about work"
"""

import argparse
import random
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import DATASET_PATH, DATASET_URL, SAMPLE_QUERIES, setup_logging
from support_engine.keywords import categorize_input
from support_engine.matcher import ResponseMatcher
from support_engine.safety import check_crisis


def main():
    parser = argparse.ArgumentParser(description="Try queries against the support assistant.")
    parser.add_argument("queries", nargs="*", help="Queries to run (defaults to the built-in samples).")
    parser.add_argument("--no-dataset", action="store_true", help="Only use the built-in responses.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible fallback picks.")
    args = parser.parse_args()

    setup_logging()

    matcher = ResponseMatcher(rng=random.Random(args.seed))
    if not args.no_dataset:
        result = matcher.load_dataset(DATASET_URL or DATASET_PATH)
        print(f"📂 Dataset: {result.status} ({result.records_added} responses)")

    print("=" * 60)
    print("Testing assistant with sample queries...")
    print("=" * 60)

    for query in args.queries or SAMPLE_QUERIES:
        triage = check_crisis(query)
        match = matcher.find_best_match(query)
        response = matcher.get_response(query)

        print(f"\nQuery: \"{query}\"")
        if triage:
            print(f"   🚨 CRISIS (matched '{triage.matched_phrase}')")
        else:
            print(f"   Category: {categorize_input(query)}  Best score: {match.score:.3f}")
        print(f"   Response: \"{response[:100]}...\"")
        print("-" * 40)


if __name__ == "__main__":
    main()
