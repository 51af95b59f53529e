#!/usr/bin/env python3
"""
catalogctl - Catalog API operational CLI

A lightweight CLI for day-2 operations:
- Readiness checks against the configured store (catalogctl doctor)
- Querying a running instance's health endpoints (catalogctl probe)
- Version info (catalogctl version)
"""

import argparse
import asyncio
import json
import sys

import httpx

from catalog_api import __version__
from catalog_api.app import create_mongo_client
from catalog_api.core.config import get_config
from catalog_api.health import HealthReport, HealthReporter, HealthStatus, mongodb_probe
from catalog_api.health.models import format_duration


class Colors:
    """ANSI color codes for terminal output."""

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


STATUS_COLORS = {
    HealthStatus.HEALTHY: Colors.GREEN,
    HealthStatus.DEGRADED: Colors.YELLOW,
    HealthStatus.UNHEALTHY: Colors.RED,
}


def colorize(text: str, color: str) -> str:
    """Colorize text if stdout is a TTY."""
    if sys.stdout.isatty():
        return f"{color}{text}{Colors.RESET}"
    return text


def format_check_result(name: str, status: HealthStatus, message: str, width: int = 30) -> str:
    """Format a check result line."""
    padding = " " * max(1, width - len(name))
    status_str = colorize(f"[{status.value}]", STATUS_COLORS[status])
    return f"{name}:{padding}{status_str} {message}"


def print_report(report: HealthReport) -> None:
    for entry in report.entries:
        message = f"({format_duration(entry.duration)})"
        if entry.status != HealthStatus.HEALTHY:
            message = f"{entry.exception} {message}"
        print(format_check_result(entry.name, entry.status, message))


async def cmd_doctor(args) -> int:
    """
    Run the readiness probes in-process against the configured store.

    Returns:
        Exit code (0 when healthy, 1 otherwise)
    """
    config = get_config()

    print(colorize("\nCatalog API Doctor", Colors.BOLD))
    print(colorize("=" * 60, Colors.BOLD))
    print()

    client = create_mongo_client(config.mongodb)
    try:
        reporter = HealthReporter([mongodb_probe(client, timeout=args.timeout)])
        report = await reporter.report_ready()
    finally:
        client.close()

    print_report(report)
    print()

    if report.status == HealthStatus.HEALTHY:
        print(colorize("✓ All readiness checks passed", Colors.GREEN))
        return 0
    else:
        print(colorize(f"✗ Overall status: {report.status.value}", Colors.RED))
        return 1


async def cmd_probe(args) -> int:
    """
    Query a running instance's health endpoint and print the JSON body.

    Returns:
        Exit code (0 when the reported status is Healthy)
    """
    url = f"{args.url.rstrip('/')}/health/{args.endpoint}"
    try:
        async with httpx.AsyncClient(timeout=args.timeout) as client:
            response = await client.get(url)
            response.raise_for_status()
            body = response.json()
    except httpx.ConnectError:
        print(colorize(f"✗ Cannot connect to {url}", Colors.RED), file=sys.stderr)
        return 2
    except httpx.TimeoutException:
        print(colorize(f"✗ Timed out waiting for {url}", Colors.RED), file=sys.stderr)
        return 2
    except httpx.HTTPStatusError as e:
        print(colorize(f"✗ {url} returned {e.response.status_code}", Colors.RED), file=sys.stderr)
        return 2

    print(json.dumps(body, indent=2))
    return 0 if body.get("status") == HealthStatus.HEALTHY.value else 1


def cmd_version(args) -> int:
    """Print version information."""
    print(f"catalogctl version {__version__}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for catalogctl."""
    parser = argparse.ArgumentParser(
        description="Catalog API operational CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  catalogctl doctor                              # Ping the configured MongoDB
  catalogctl probe --url http://localhost:8000   # Readiness of a running instance
  catalogctl probe --endpoint live               # Liveness of a running instance
  catalogctl version                             # Show version information

Environment variables:
  MONGODB_HOST, MONGODB_PORT, MONGODB_USER, MONGODB_PASSWORD
  MONGODB_CONNECTION_STRING                      # Overrides the four above
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    doctor_parser = subparsers.add_parser(
        "doctor",
        help="Run readiness checks against the configured store"
    )
    doctor_parser.add_argument(
        "--timeout",
        type=float,
        default=3.0,
        help="Probe timeout in seconds (default: 3.0)"
    )

    probe_parser = subparsers.add_parser(
        "probe",
        help="Query the health endpoint of a running instance"
    )
    probe_parser.add_argument(
        "--url",
        default="http://localhost:8000",
        help="Base URL of the service (default: http://localhost:8000)"
    )
    probe_parser.add_argument(
        "--endpoint",
        choices=["ready", "live"],
        default="ready",
        help="Health endpoint to query (default: ready)"
    )
    probe_parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="HTTP timeout in seconds (default: 10.0)"
    )

    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def main(argv=None):
    """Main entry point for catalogctl CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "doctor":
        return asyncio.run(cmd_doctor(args))
    elif args.command == "probe":
        return asyncio.run(cmd_probe(args))
    elif args.command == "version":
        return cmd_version(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
