"""
Command-line interface for the Sprint.ly to JIRA migration tool.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

from . import sprintly_utils as slu
from .config import MigrationConfig
from .exceptions import ConfigError
from .migrator import MigrationReport, SprintlyToJiraMigrator
from .utils import setup_logging


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Export Sprint.ly items to a JIRA CSV import file")

    _ = parser.add_argument("config", type=Path, help="Path to the JSON migration configuration")

    _ = parser.add_argument("--output", "-o", type=Path, help="CSV output path (default: outputPath from config)")
    _ = parser.add_argument("--first", type=int, help="Override firstTicketNum")
    _ = parser.add_argument("--last", type=int, help="Override lastTicketNum")
    _ = parser.add_argument("--fail-fast", action="store_true", help="Stop at the first item that fails")
    _ = parser.add_argument(
        "--sprintly-pass-token", help="Path for Sprint.ly API key in pass utility (default: sprintly/api_key)"
    )
    _ = parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    return parser.parse_args(argv)


def _print_report(report: MigrationReport, output: Path) -> None:
    print("=" * 60)
    print(f"Migration {'PASSED' if report.success else 'FINISHED WITH FAILURES'}")
    print(f"CSV file: {output}")
    for key, value in report.statistics.items():
        print(f"  {key}: {value}")
    if report.failures:
        print("Failed items:")
        for failure in report.failures:
            print(f"  #{failure.item_number} [{failure.field}] {failure.message}")
        numbers = ",".join(str(n) for n in report.failed_numbers)
        print(f"Fix the configuration and re-run with --first/--last covering: {numbers}")
    print("=" * 60)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)

    verbose: bool = getattr(args, "verbose", False)
    setup_logging(verbose=verbose)
    logger = logging.getLogger(__name__)

    try:
        config = MigrationConfig.load(args.config)
        overrides: dict[str, int] = {}
        if args.first is not None:
            overrides["first_ticket_num"] = args.first
        if args.last is not None:
            overrides["last_ticket_num"] = args.last
        if overrides:
            config = dataclasses.replace(config, **overrides)

        api_key = slu.get_token(args.sprintly_pass_token)
        if not api_key or not config.sprintly_email:
            msg = "Sprint.ly credentials missing: set sprintlyEmail in the config and SPRINTLY_API_KEY or a pass entry"
            raise ConfigError(msg)
        source = slu.SprintlyClient(
            config.sprintly_project_num,
            email=config.sprintly_email,
            api_key=api_key,
            base_url=config.sprintly_base_url,
        )
        migrator = SprintlyToJiraMigrator(config, source, fail_fast=args.fail_fast)

        output: Path = args.output or Path(config.output_path)
        report = asyncio.run(migrator.migrate_to_csv(output))
        _print_report(report, output)

        sys.exit(0 if report.success else 1)

    except Exception:
        logger.exception("Migration failed")
        sys.exit(1)
