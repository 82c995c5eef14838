#!/usr/bin/env python3
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

"""
Programmatic usage example - using Chart Scanner as a Python library.

This example demonstrates:
1. Building a scanner from a preset with local overrides
2. Scanning a chart archive from disk
3. Inspecting the violation and its sanitization diff
"""

import sys
from pathlib import Path

from chart_scanner import ChartArchiveError, ChartScanner, ScanPolicy
from chart_scanner.core.models import Policy


def main(argv):
    chart_path = Path(argv[1]) if len(argv) > 1 else Path("mychart-0.1.0.tgz")

    if not chart_path.exists():
        print(f"Error: Chart not found: {chart_path}")
        print("Pass the path to a packaged chart (helm package ...).")
        return 2

    # Strict preset, but also look inside rendered YAML templates
    policy = ScanPolicy.from_preset("strict")
    policy = policy.with_overrides(
        inspected_extensions=policy.content.inspected_extensions | {".yaml"},
    )
    scanner = ChartScanner(policy=policy)

    print(f"Scanning chart: {chart_path}")
    print(f"Inspecting: {', '.join(sorted(policy.content.inspected_extensions))}\n")

    try:
        result = scanner.scan_file(chart_path)
    except ChartArchiveError as e:
        print(f"Not a readable chart archive: {e}")
        return 2

    print(f"{'=' * 60}")
    print("Scan Results")
    print(f"{'=' * 60}")
    print(f"Is Safe: {result.is_safe}")
    print(f"Entries Scanned: {result.entries_scanned}")
    print(f"Entries Inspected: {result.entries_inspected}")
    print(f"Scan Duration: {result.scan_duration_seconds:.2f}s")

    if result.is_safe:
        return 0

    violation = result.violation
    print(f"\n[{violation.policy.value}] {violation.violation}")

    if violation.policy == Policy.MALICIOUS_CONTENT:
        print(f"\n{'=' * 60}")
        print("Sanitization Diff:")
        print(f"{'=' * 60}")
        print(violation.context)

    return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv))
