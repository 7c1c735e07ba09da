"""CLI entry point for the conformance harness."""

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from conformance_harness.discovery import discover_fixtures
from conformance_harness.errors import HarnessError
from conformance_harness.fixture_loader import load_fixture
from conformance_harness.hosts.base import Host
from conformance_harness.hosts.loading import load_host_manifest
from conformance_harness.models.fixture import Fixture
from conformance_harness.models.result import ExecutionResult, FixtureReport
from conformance_harness.runner import FixtureRunner

DEFAULT_HOST = "v8"

STATUS_SYMBOLS = {
    "pass": "✅",
    "fail": "❌",
    "error": "❗",
}


def log_results_summary(log: logging.Logger, reports: Sequence[FixtureReport]) -> None:
    """Log a formatted summary of fixture results."""
    log.info("=" * 80)
    log.info("Fixture Results Summary:")
    log.info("=" * 80)

    for report in reports:
        result = report.result
        symbol = STATUS_SYMBOLS.get(result.status, "?")
        log.info(
            "%s %s: %s (%.2fs)",
            symbol,
            report.fixture_path,
            result.status,
            result.duration,
        )
        if report.description:
            log.info("  Description: %s", report.description)
        if result.message:
            log.info("  Message: %s", result.message)


def build_host(host_key: str, host_config_json: str) -> Host:
    """Load a host plugin and create it from its JSON configuration."""
    log = logging.getLogger("conformance_harness")

    log.info("Loading host: %s", host_key)
    manifest = load_host_manifest(host_key)

    config_dict = json.loads(host_config_json)
    config = manifest.config_cls(**config_dict)
    return manifest.host_factory(config)


def load_fixtures(paths: Sequence[Path]) -> Sequence[Fixture | FixtureReport]:
    """Load fixtures, turning load failures into error reports."""
    log = logging.getLogger("conformance_harness")
    entries: list[Fixture | FixtureReport] = []

    for path in paths:
        try:
            entries.append(load_fixture(path))
        except HarnessError as e:
            log.error("Failed to load fixture %s: %s", path, e)
            entries.append(
                FixtureReport(
                    fixture_path=str(path),
                    description="",
                    result=ExecutionResult(
                        status="error",
                        duration=0.0,
                        fault="load",
                        message=str(e),
                    ),
                )
            )

    return entries


def run(
    paths: Sequence[Path],
    host_key: str = DEFAULT_HOST,
    host_config_json: str = "{}",
    include_dir: Path | None = None,
) -> int:
    """Run fixtures and return exit code."""
    log = logging.getLogger("conformance_harness")

    host = build_host(host_key, host_config_json)

    fixture_paths = discover_fixtures(paths)
    if not fixture_paths:
        log.info("No fixtures found")
        print(json.dumps(format_output([])))
        return 0

    log.info("Loading %d fixture(s)...", len(fixture_paths))
    entries = load_fixtures(fixture_paths)

    runner = FixtureRunner(host=host, include_dir=include_dir)
    run_reports = iter(
        runner.run_all([entry for entry in entries if isinstance(entry, Fixture)])
    )
    reports = [
        next(run_reports) if isinstance(entry, Fixture) else entry for entry in entries
    ]

    log_results_summary(log, reports)

    output = format_output(reports)
    print(json.dumps(output, indent=2))

    return 0 if all(report.result.passed for report in reports) else 1


def list_fixtures(paths: Sequence[Path]) -> int:
    """Print discovered fixtures with their descriptions and return exit code."""
    entries = load_fixtures(discover_fixtures(paths))

    listing = [
        {"fixture": str(entry.path), "description": entry.description}
        if isinstance(entry, Fixture)
        else {"fixture": entry.fixture_path, "error": entry.result.message}
        for entry in entries
    ]
    print(json.dumps({"total": len(listing), "fixtures": listing}, indent=2))

    return 0 if all(isinstance(entry, Fixture) for entry in entries) else 1


def describe_global(
    name: str, host_key: str = DEFAULT_HOST, host_config_json: str = "{}"
) -> int:
    """Print the descriptor of a global property and return exit code."""
    log = logging.getLogger("conformance_harness")

    host = build_host(host_key, host_config_json)
    with host.open_realm() as realm:
        descriptor = realm.get_global_property_descriptor(name)

    if descriptor is None:
        log.error("Global property '%s' does not exist on host %s", name, host_key)
        return 1

    print(json.dumps({"name": name, **descriptor.model_dump()}, indent=2))
    return 0


def format_output(reports: Sequence[FixtureReport]) -> dict[str, Any]:
    """Format fixture reports for JSON output."""
    all_results: list[dict[str, Any]] = [
        {
            "fixture": report.fixture_path,
            "description": report.description,
            "status": report.result.status,
            "fault": report.result.fault,
            "duration": report.result.duration,
            "message": report.result.message,
        }
        for report in reports
    ]

    return {
        "total": len(all_results),
        "passed": sum(1 for r in all_results if r["status"] == "pass"),
        "failed": sum(1 for r in all_results if r["status"] == "fail"),
        "errors": sum(1 for r in all_results if r["status"] == "error"),
        "results": all_results,
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run test262-style conformance fixtures on a scripting host"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    host_options = argparse.ArgumentParser(add_help=False)
    host_options.add_argument(
        "--host",
        default=DEFAULT_HOST,
        help="Host key (v8)",
    )
    host_options.add_argument(
        "--host-config",
        default="{}",
        help="JSON configuration for the host",
    )

    run_parser = subparsers.add_parser(
        "run", parents=[host_options], help="Run fixture files or directories"
    )
    run_parser.add_argument("paths", nargs="+", type=Path, help="Fixtures to run")
    run_parser.add_argument(
        "--include-dir",
        type=Path,
        default=None,
        help="Directory holding harness includes named by fixtures",
    )

    list_parser = subparsers.add_parser("list", help="List fixtures and descriptions")
    list_parser.add_argument("paths", nargs="+", type=Path, help="Fixtures to list")

    describe_parser = subparsers.add_parser(
        "describe-global",
        parents=[host_options],
        help="Print the descriptor of a global property",
    )
    describe_parser.add_argument("name", help="Global property name (e.g., escape)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.command == "run":
        exit_code = run(
            paths=args.paths,
            host_key=args.host,
            host_config_json=args.host_config,
            include_dir=args.include_dir,
        )
    elif args.command == "list":
        exit_code = list_fixtures(args.paths)
    else:
        exit_code = describe_global(
            args.name, host_key=args.host, host_config_json=args.host_config
        )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
