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
Markdown format reporter for scan results.
"""

import re

from ...core.models import ScanResult


def code_fence(text: str) -> str:
    """Backtick fence longer than any backtick run inside *text*."""
    longest = max((len(run) for run in re.findall(r"`+", text)), default=0)
    return "`" * max(3, longest + 1)


class MarkdownReporter:
    """Generates Markdown format reports."""

    def __init__(self, detailed: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            detailed: If True, include the diff of a content violation
        """
        self.detailed = detailed

    def generate_report(self, result: ScanResult) -> str:
        """
        Generate Markdown report.

        Args:
            result: ScanResult object

        Returns:
            Markdown string
        """
        lines = []

        # Header
        lines.append("# Chart Security Scan Report")
        lines.append("")
        lines.append(f"**Archive:** {result.archive_name}")
        lines.append(f"**Status:** {'[OK] SAFE' if result.is_safe else '[FAIL] POLICY VIOLATION'}")
        lines.append(f"**Policy Set:** {result.policy_name or 'default'}")
        lines.append(f"**Scan Duration:** {result.scan_duration_seconds:.2f}s")
        lines.append(f"**Timestamp:** {result.timestamp.isoformat()}")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Entries Scanned:** {result.entries_scanned}")
        lines.append(f"- **Entries Inspected:** {result.entries_inspected}")
        lines.append("")

        if result.violation is None:
            lines.append("## [OK] No Issues Found")
            lines.append("")
            lines.append("This chart passed all policy checks.")
            lines.append("")
            return "\n".join(lines)

        violation = result.violation
        lines.append("## Violation")
        lines.append("")
        lines.append(f"- **Policy:** `{violation.policy.value}`")
        lines.append(f"- **Message:** {violation.violation}")
        lines.append("")

        if self.detailed and violation.context:
            lines.append("### Sanitization Diff")
            lines.append("")
            fence = code_fence(violation.context)
            lines.append(f"{fence}diff")
            lines.append(violation.context.rstrip("\n"))
            lines.append(fence)
            lines.append("")

        return "\n".join(lines)
