# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for the Chart Scanner."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.config import Config
from ..core.exceptions import ChartArchiveError
from ..core.models import ScanResult
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.markdown_reporter import MarkdownReporter
from ..core.scan_policy import ScanPolicy
from ..core.scanner import ChartScanner

logger = logging.getLogger("chart_scanner.cli")

EXIT_OK = 0
EXIT_VIOLATION = 1
EXIT_ERROR = 2


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(args: argparse.Namespace, config: Config) -> None:
    level = logging.DEBUG if getattr(args, "verbose", False) else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _load_policy(args: argparse.Namespace, config: Config) -> ScanPolicy:
    """Load scan policy from ``--policy`` / environment, then apply flag overrides.

    Raises:
        FileNotFoundError: If a policy path does not exist
        ValueError: If the policy is invalid
    """
    if getattr(args, "policy", None):
        config.policy = args.policy
    if getattr(args, "max_compressed_size", None) is not None:
        config.max_compressed_size_bytes = args.max_compressed_size
    if getattr(args, "max_uncompressed_size", None) is not None:
        config.max_uncompressed_size_bytes = args.max_uncompressed_size
    if getattr(args, "extension", None):
        config.inspected_extensions = args.extension

    policy = config.to_scan_policy()
    logger.info("Using %s scan policy", policy.policy_name)
    return policy


def _format_output(args: argparse.Namespace, result: ScanResult) -> str:
    """Generate the formatted output string for a scan result."""
    fmt = getattr(args, "format", "summary")
    if fmt == "json":
        return JSONReporter(pretty=not args.compact).generate_report(result)
    if fmt == "markdown":
        return MarkdownReporter(detailed=True).generate_report(result)
    return _generate_summary(result)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def scan_command(args: argparse.Namespace) -> int:
    """Handle the ``scan`` command for a single chart archive."""
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Error in environment configuration: {e}", file=sys.stderr)
        return EXIT_ERROR
    _configure_logging(args, config)

    try:
        policy = _load_policy(args, config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (ValueError, OSError) as e:
        print(f"Error loading policy: {e}", file=sys.stderr)
        return EXIT_ERROR

    scanner = ChartScanner(policy=policy)

    try:
        if args.archive == "-":
            result = scanner.scan(sys.stdin.buffer, archive_name="<stdin>")
        else:
            archive = Path(args.archive)
            if not archive.is_file():
                print(f"Error: File does not exist: {archive}", file=sys.stderr)
                return EXIT_ERROR
            result = scanner.scan_file(archive)
    except ChartArchiveError as e:
        cause = f": {e.__cause__}" if e.__cause__ else ""
        print(f"Error: {e}{cause}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    _write_output(args, _format_output(args, result))

    if not result.is_safe and args.fail_on_violation:
        return EXIT_VIOLATION
    return EXIT_OK


def generate_policy_command(args: argparse.Namespace) -> int:
    """Write a preset policy to a YAML file for editing."""
    try:
        policy = ScanPolicy.from_preset(args.preset)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    policy.to_yaml(args.output)
    print(f"Policy written to: {args.output}")
    return EXIT_OK


def list_presets_command(_args: argparse.Namespace) -> int:
    """Print the available preset policies."""
    for name in ScanPolicy.preset_names():
        policy = ScanPolicy.from_preset(name)
        exts = ", ".join(sorted(policy.content.inspected_extensions))
        print(
            f"{name:<12s} compressed<={policy.limits.max_compressed_size_bytes} "
            f"uncompressed<={policy.limits.max_uncompressed_size_bytes} extensions=[{exts}]"
        )
    return EXIT_OK


# ---------------------------------------------------------------------------
# Summary formatter
# ---------------------------------------------------------------------------


def _generate_summary(result: ScanResult) -> str:
    lines = [
        "=" * 60,
        f"Chart: {result.archive_name}",
        "=" * 60,
        f"Status: {'[OK] SAFE' if result.is_safe else '[FAIL] POLICY VIOLATION'}",
        f"Entries Scanned: {result.entries_scanned}",
        f"Entries Inspected: {result.entries_inspected}",
        f"Scan Duration: {result.scan_duration_seconds:.2f}s",
    ]
    if result.violation is not None:
        lines.append("")
        lines.append(f"Policy: {result.violation.policy.value}")
        lines.append(f"Violation: {result.violation.violation}")
        if result.violation.context:
            lines.append("")
            lines.append(result.violation.context.rstrip("\n"))
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chart-scanner",
        description="Chart Scanner - Security scanner for Helm chart archives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chart-scanner scan mychart-0.1.0.tgz
  chart-scanner scan mychart-0.1.0.tgz --format json --fail-on-violation
  chart-scanner scan mychart-0.1.0.tgz --policy strict
  chart-scanner scan - < mychart-0.1.0.tgz
  chart-scanner generate-policy -o my_policy.yaml
  chart-scanner list-presets
        """,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- scan --------------------------------------------------------------
    scan_p = subparsers.add_parser("scan", help="Scan a chart archive (.tgz)")
    scan_p.add_argument("archive", help="Path to chart archive, or '-' for stdin")
    scan_p.add_argument(
        "--policy",
        metavar="PRESET_OR_PATH",
        help="Scan policy: preset name (strict, balanced, permissive) or path to custom YAML",
    )
    scan_p.add_argument("--max-compressed-size", type=_positive_int, metavar="BYTES", help="Compressed size limit")
    scan_p.add_argument("--max-uncompressed-size", type=_positive_int, metavar="BYTES", help="Uncompressed size limit")
    scan_p.add_argument(
        "--extension",
        action="append",
        metavar="EXT",
        help="File extension to inspect (repeatable; replaces the policy's list)",
    )
    scan_p.add_argument(
        "--format",
        choices=["summary", "json", "markdown"],
        default="summary",
        help="Output format (default: summary)",
    )
    scan_p.add_argument("--output", "-o", help="Output file path")
    scan_p.add_argument("--compact", action="store_true", help="Compact JSON output")
    scan_p.add_argument("--fail-on-violation", action="store_true", help="Exit with status 1 on a policy violation")
    scan_p.add_argument("--verbose", action="store_true", help="Enable debug logging")

    # -- generate-policy ---------------------------------------------------
    gp_p = subparsers.add_parser("generate-policy", help="Generate a scan policy YAML")
    gp_p.add_argument("--output", "-o", default="scan_policy.yaml", help="Output file path")
    gp_p.add_argument("--preset", choices=ScanPolicy.preset_names(), default="balanced", help="Base preset")

    # -- list-presets ------------------------------------------------------
    subparsers.add_parser("list-presets", help="List built-in policy presets")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    dispatch = {
        "scan": scan_command,
        "generate-policy": generate_policy_command,
        "list-presets": list_presets_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
