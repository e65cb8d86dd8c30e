#!/usr/bin/env python3
"""Sample normalization harness for end-to-end validation.

This script provides a manual way to validate the FounderFlow normalizer
without running pytest. It loads a fixture import file, normalizes every
record and prints a summary, the tag index and the first few display cards.

Usage:
    # Run with the bundled fixture records
    python scripts/run_sample_normalization.py

    # Custom import file and config
    python scripts/run_sample_normalization.py --records my_export.jsonl --config config.yaml

    # Fixed reference date for reproducible relative dates
    python scripts/run_sample_normalization.py --as-of 2024-01-31
"""

import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from founderflow.config.loader import load_config
from founderflow.directory import compute_stats, find_duplicates
from founderflow.logging.config import configure_logging
from founderflow.normalization import RecordNormalizer
from founderflow.projections import to_display
from founderflow.sources import read_records
from founderflow.utils.timestamps import parse_datetime


def print_header(title: str):
    """Print a formatted section header."""
    width = 80
    print("\n" + "=" * width)
    print(f" {title}")
    print("=" * width + "\n")


def print_summary_table(batch, stats):
    """Print a formatted summary table of normalization results."""
    print_header("Normalization Summary")

    metrics = [
        ("Records Read", batch.total),
        ("Records Normalized", len(batch.records)),
        ("Records Failed", len(batch.failures)),
        ("Distinct Tags", len(batch.tag_index)),
        ("Without Email", stats.without_email),
        ("Without LinkedIn", stats.without_network_profile),
        ("Without Website", stats.without_company_site),
        ("Duplicate Groups", stats.duplicate_groups),
    ]

    max_label_width = max(len(label) for label, _ in metrics)

    print("┌" + "─" * (max_label_width + 2) + "┬" + "─" * 22 + "┐")
    print(f"│ {'Metric':<{max_label_width}} │ {'Value':<20} │")
    print("├" + "─" * (max_label_width + 2) + "┼" + "─" * 22 + "┤")

    for label, value in metrics:
        print(f"│ {label:<{max_label_width}} │ {str(value):<20} │")

    print("└" + "─" * (max_label_width + 2) + "┴" + "─" * 22 + "┘")


def main():
    """Main entry point for the sample normalization harness."""
    parser = argparse.ArgumentParser(
        description="Run a sample normalization for end-to-end validation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--records",
        type=Path,
        default=Path("tests/fixtures/records.json"),
        help="Import file (default: tests/fixtures/records.json)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: built-in defaults)",
    )
    parser.add_argument("--as-of", default=None, help="Reference date for relative dates")
    parser.add_argument("--show", type=int, default=3, help="Display cards to print (default: 3)")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (default: INFO)",
    )

    args = parser.parse_args()

    load_dotenv()

    print_header("FounderFlow - Sample Normalization Harness")
    print(f"Records file: {args.records}")
    print(f"Configuration file: {args.config or '(defaults)'}")

    if not args.records.exists():
        print(f"\n❌ Error: Records file not found: {args.records}")
        return 1

    try:
        app_config, env_config = load_config(args.config)
        configure_logging(
            level=args.log_level,
            format_type=app_config.logging.format,
            environment="validation",
        )

        now = parse_datetime(args.as_of) if args.as_of else None
        raw_records = read_records(args.records)
        batch = RecordNormalizer.from_config(app_config, now=now).normalize_batch(raw_records)
        stats = compute_stats(batch.records)

        print_summary_table(batch, stats)

        print_header("Top Tags")
        for tag, count in batch.tag_index.most_common(10):
            print(f"  {tag:<30} {count}")

        duplicates = find_duplicates(batch.records)
        if duplicates:
            print_header("Duplicate Groups")
            for group in duplicates:
                print(f"  {group[0].contact_name} @ {group[0].company}: {len(group)} records")

        print_header("Sample Display Cards")
        label = app_config.normalization.unknown_company_label
        for record in batch.records[: args.show]:
            print(json.dumps(to_display(record, unknown_company_label=label), indent=2, ensure_ascii=False))

        return 1 if batch.failures else 0

    except Exception as e:
        print(f"\n❌ Fatal error: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
