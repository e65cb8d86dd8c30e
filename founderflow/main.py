"""Command-line entry point for FounderFlow.

Reads an import file of scraped founder records, normalizes them and prints
one of the output projections, a tag index or completeness stats.
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, List, Optional, Sequence, TextIO, Tuple

from dotenv import load_dotenv

from founderflow.config.environment import EnvironmentConfig
from founderflow.config.exceptions import ConfigurationError
from founderflow.config.loader import load_config
from founderflow.config.models import AppConfig, SortOrder
from founderflow.directory import (
    CompletenessFilter,
    RecordDirectory,
    RecordQuery,
    compute_stats,
    filter_completeness,
    paginate,
)
from founderflow.domain.models import NormalizedRecord
from founderflow.logging import get_logger
from founderflow.logging.config import configure_logging
from founderflow.logging.context import log_context
from founderflow.normalization import RecordNormalizer, TagIndex
from founderflow.projections import render_csv, to_display, to_prompt_context, to_save_payload
from founderflow.sources import RecordImportError, read_records
from founderflow.utils.timestamps import parse_datetime

logger = get_logger(__name__, component="cli")

OUTPUT_FORMATS = ["display", "save", "prompt", "export", "tags", "stats"]


def load_runtime_config(
    config_path: Optional[Path],
    log_level_override: Optional[str] = None,
    log_format_override: Optional[str] = None,
    workers_override: Optional[int] = None,
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and apply CLI overrides.

    Priority: CLI > Environment > Config file > defaults.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    logging_update = {}
    if log_level_override:
        logging_update["level"] = log_level_override.upper()
    if log_format_override:
        logging_update["format"] = log_format_override
    if logging_update:
        app_config = app_config.model_copy(
            update={"logging": app_config.logging.model_copy(update=logging_update)}
        )

    if workers_override is not None:
        if workers_override < 1:
            raise ConfigurationError(
                f"Invalid --workers: {workers_override}",
                suggestions=["Use a positive number of worker threads"],
            )
        app_config = app_config.model_copy(
            update={"batch": app_config.batch.model_copy(update={"max_workers": workers_override})}
        )

    return app_config, env_config


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="founderflow",
        description="FounderFlow - normalize scraped founder records and print clean projections",
    )
    parser.add_argument(
        "input",
        help="Import file (.json, .jsonl, .yaml) or '-' for JSON on stdin",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default="display",
        choices=OUTPUT_FORMATS,
        help="Output projection (default: display)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write output to this file instead of stdout",
    )
    parser.add_argument(
        "--sort",
        default=None,
        choices=[order.value for order in SortOrder],
        help="Sort order (default from config: date_desc)",
    )
    parser.add_argument("--query", default="", help="Text filter over company, name and description")
    parser.add_argument("--skills", default="", help="Text filter over tags and role")
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="Keep records with this tag (repeatable, OR semantics)",
    )
    parser.add_argument("--only-email", action="store_true", help="Keep records with an email")
    parser.add_argument(
        "--only-network-profile", action="store_true", help="Keep records with a LinkedIn profile"
    )
    parser.add_argument(
        "--only-company-site", action="store_true", help="Keep records with a company website"
    )
    parser.add_argument(
        "--only-apply", action="store_true", help="Keep records with a direct application link"
    )
    parser.add_argument(
        "--view",
        default=CompletenessFilter.ALL.value,
        choices=[view.value for view in CompletenessFilter],
        help="Admin completeness view (default: all)",
    )
    parser.add_argument("--page", type=int, default=None, help="1-based page number")
    parser.add_argument("--per-page", type=int, default=20, help="Records per page (default: 20)")
    parser.add_argument(
        "--as-of",
        default=None,
        help="Reference date for relative dates (default: now)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for normalization (overrides config and environment)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "key-value"],
        help="Log format (overrides config and environment)",
    )
    return parser


def select_records(
    records: List[NormalizedRecord],
    app_config: AppConfig,
    args: argparse.Namespace,
) -> List[NormalizedRecord]:
    """Apply the completeness view, the query filters and the sort order.

    Only the display view hides records without a link; save, prompt and
    export keep email-only founders.
    """
    view = CompletenessFilter(args.view)
    directory = RecordDirectory.from_config(app_config)
    if args.output_format != "display":
        directory.require_actionable_link = False
    if view != CompletenessFilter.ALL:
        records = filter_completeness(records, view)
        directory.require_actionable_link = False

    query = RecordQuery(
        text=args.query,
        skills=args.skills,
        only_email=args.only_email,
        only_network_profile=args.only_network_profile,
        only_company_site=args.only_company_site,
        only_apply=args.only_apply,
        tags=frozenset(args.tags),
    )
    order = SortOrder(args.sort) if args.sort else None
    selected = directory.search(records, query, order)

    if args.page is not None:
        selected = paginate(selected, args.page, args.per_page).items
    return selected


def render_output(
    output_format: str,
    records: List[NormalizedRecord],
    all_records: List[NormalizedRecord],
    tag_index: TagIndex,
    app_config: AppConfig,
) -> str:
    """Render the selected projection as text."""
    if output_format == "export":
        return render_csv(records)

    payload: Any
    if output_format == "display":
        label = app_config.normalization.unknown_company_label
        payload = [to_display(r, unknown_company_label=label) for r in records]
    elif output_format == "save":
        payload = [to_save_payload(r) for r in records]
    elif output_format == "prompt":
        payload = [to_prompt_context(r) for r in records]
    elif output_format == "tags":
        payload = [{"tag": tag, "count": count} for tag, count in tag_index.most_common()]
    else:
        payload = compute_stats(all_records).to_dict()

    return json.dumps(payload, indent=2, ensure_ascii=False)


def _write(text: str, output: Optional[Path], stdout: TextIO) -> None:
    if output is None:
        stdout.write(text + "\n")
        return
    output.write_text(text + "\n", encoding="utf-8")


def main(argv: Optional[Sequence[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """
    Main entry point for FounderFlow.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    load_dotenv()
    start_time = time.time()
    stdout = stdout or sys.stdout
    args = build_parser().parse_args(argv)

    try:
        # Step 1: Load configuration early (before logging for format detection)
        app_config, env_config = load_runtime_config(
            args.config, args.log_level, args.log_format, args.workers
        )

        # Step 2: Configure logging
        configure_logging(
            level=app_config.logging.level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        now = None
        if args.as_of:
            now = parse_datetime(args.as_of)
            if now is None:
                raise ConfigurationError(
                    f"Invalid --as-of date: {args.as_of}",
                    suggestions=["Use an ISO date such as 2024-01-31"],
                )

        logger.info(
            "FounderFlow starting",
            extra={
                "event": "cli.starting",
                "input": args.input,
                "output_format": args.output_format,
                "max_workers": app_config.batch.max_workers,
            },
        )

        # Step 3: Import and normalize
        with log_context(source_file=args.input):
            raw_records = read_records(args.input)
            normalizer = RecordNormalizer.from_config(app_config, now=now)
            batch = normalizer.normalize_batch(raw_records)

        # Step 4: Select and render
        selected = select_records(batch.records, app_config, args)
        text = render_output(
            args.output_format, selected, batch.records, batch.tag_index, app_config
        )
        _write(text, args.output, stdout)

        logger.info(
            f"Rendered {len(selected)} of {batch.total} records",
            extra={
                "event": "cli.completed",
                "selected": len(selected),
                "normalized": len(batch.records),
                "failed": len(batch.failures),
                "duration_seconds": round(time.time() - start_time, 3),
            },
        )
        return 1 if batch.failures else 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except RecordImportError as e:
        print(f"Import Error: {e}", file=sys.stderr)
        logger.error(
            f"Import failed: {e}",
            extra={"event": "import.failed", "source": e.path, "line": e.line},
        )
        return 1
    except ValueError as e:
        # Bad page numbers and similar argument errors
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "cli.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
