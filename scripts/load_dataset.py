#!/usr/bin/env python3
"""
scripts/load_dataset.py - Load a CSV Dataset and Report Statistics
===================================================================

This script parses a prompt/response CSV file (or URL) into the
assistant's corpus and prints what was loaded: record counts, the
category breakdown, the average number of keywords per record and any
rows that had to be skipped.

Usage:
    python scripts/load_dataset.py
    python scripts/load_dataset.py data/reddit_text-davinci-002.csv
    python scripts/load_dataset.py https://example.org/dataset.csv --samples 3

Run this whenever you swap in a new dataset to check that it parses.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import DATASET_PATH, DATASET_URL, setup_logging
from support_engine.matcher import ResponseMatcher


def main():
    """Main entry point for loading the dataset."""
    parser = argparse.ArgumentParser(description="Load a CSV dataset into the support assistant.")
    parser.add_argument(
        "source",
        nargs="?",
        default=DATASET_URL or DATASET_PATH,
        help="CSV file path or http(s) URL (defaults to DATASET_URL / DATASET_PATH).",
    )
    parser.add_argument("--samples", type=int, default=5, help="Number of loaded records to preview.")
    args = parser.parse_args()

    setup_logging()

    print("=" * 60)
    print("SUPPORT ASSISTANT - Loading Dataset")
    print("=" * 60)
    print()
    print(f"📁 Source: {args.source}")

    matcher = ResponseMatcher()
    seed_count = len(matcher.corpus)
    result = matcher.load_dataset(args.source)

    if result.status == "failed":
        print(f"❌ Could not read dataset: {result.error}")
        print(f"   The assistant will keep answering from its {seed_count} built-in responses")
        sys.exit(1)

    if result.status == "empty":
        print("⚠️  No usable rows found in the dataset")

    stats = result.stats
    print()
    print("📊 STATISTICS")
    print("-" * 40)
    print(f"   Responses loaded: {stats['total_responses']}")
    print(f"   Rows skipped: {len(result.warnings)}")
    print(f"   Average keywords per response: {stats['average_keywords_per_response']:.2f}")
    print("   Categories:")
    for category, count in sorted(stats["categories"].items(), key=lambda kv: -kv[1]):
        print(f"     {category:<14} {count}")

    if result.warnings:
        print()
        print("⚠️  SKIPPED ROWS")
        print("-" * 40)
        for warning in result.warnings[:20]:
            print(f"   line {warning.line_number}: {warning.reason}")
        if len(result.warnings) > 20:
            print(f"   ... and {len(result.warnings) - 20} more")

    samples = matcher.get_sample_responses(args.samples)
    if samples:
        print()
        print("🔍 SAMPLE RECORDS")
        print("-" * 40)
        for record in samples:
            print(f"   [{record.category}] {record.prompt[:70]}")
            print(f"      keywords: {', '.join(sorted(record.keywords)) or '(none)'}")

    print()
    print("=" * 60)
    print(f"✅ Corpus size: {len(matcher.corpus)} ({seed_count} built-in + {result.records_added} loaded)")
    print("=" * 60)


if __name__ == "__main__":
    main()
