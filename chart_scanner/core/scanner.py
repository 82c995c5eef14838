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
Core scanner engine for chart archives.

Pipeline: bounded read of the compressed stream, bounded decompression,
sequential walk over the tar entries, extension filter, and the
sanitization-diff check. The first policy violation ends the scan.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import BinaryIO

from ..config.constants import ChartScannerConstants
from .analyzers.base import BaseAnalyzer
from .analyzers.sanitization import SanitizationAnalyzer
from .content_filter import ContentPolicyFilter
from .extractors.archive_walker import ArchiveWalker
from .models import Policy, PolicyViolation, ScanResult
from .scan_policy import ScanPolicy

logger = logging.getLogger(__name__)


class ChartScanner:
    """Scans Helm chart archives for oversized payloads and injected markup.

    The scanner keeps no state between calls. Concurrent scans are safe as
    long as each call gets its own stream.
    """

    def __init__(self, policy: ScanPolicy | None = None, analyzers: list[BaseAnalyzer] | None = None):
        """
        Initialize scanner.

        Args:
            policy: Size limits and inspected extensions. If None, loads
                the built-in default policy.
            analyzers: Per-entry analyzers. If None, uses the
                sanitization-diff analyzer.
        """
        self.policy = policy or ScanPolicy.default()
        self.walker = ArchiveWalker(self.policy.limits)
        self.content_filter = ContentPolicyFilter.from_policy(self.policy.content)
        self.analyzers = analyzers if analyzers is not None else [SanitizationAnalyzer()]

    def scan(self, stream: BinaryIO, archive_name: str = "<stream>") -> ScanResult:
        """
        Scan a gzip-compressed chart archive.

        The stream is only read, never closed or retained.

        Args:
            stream: Readable binary stream holding the archive
            archive_name: Label used in logs and in the result

        Returns:
            ScanResult; ``violation`` is set if a policy was violated

        Raises:
            ChartArchiveError: If the archive cannot be read or decoded
        """
        start = time.monotonic()
        result = ScanResult(archive_name=archive_name, policy_name=self.policy.policy_name)
        logger.info("Scanning chart archive %s", archive_name)

        try:
            result.violation = self._run(stream, result)
        finally:
            result.scan_duration_seconds = time.monotonic() - start

        if result.violation is not None:
            logger.warning(
                "Chart archive %s violates policy %s: %s",
                archive_name,
                result.violation.policy.value,
                result.violation.violation,
            )
        else:
            logger.info(
                "Chart archive %s passed (%d entries, %d inspected)",
                archive_name,
                result.entries_scanned,
                result.entries_inspected,
            )
        return result

    def scan_file(self, path: str | Path) -> ScanResult:
        """Scan a chart archive on disk."""
        path = Path(path)
        with open(path, "rb") as fh:
            return self.scan(fh, archive_name=path.name)

    def _run(self, stream: BinaryIO, result: ScanResult) -> PolicyViolation | None:
        compressed = self.walker.read_compressed(stream)
        if compressed.exceeded:
            return self._size_violation(Policy.COMPRESSED_ARCHIVE_SIZE)

        decompressed = self.walker.decompress(compressed.data)
        del compressed
        if decompressed.exceeded:
            return self._size_violation(Policy.UNCOMPRESSED_ARCHIVE_SIZE)

        for entry in self.walker.iter_entries(decompressed.data):
            result.entries_scanned += 1
            if not self.content_filter.is_eligible(entry.name):
                logger.debug("Skipping %s", entry.name)
                continue

            result.entries_inspected += 1
            for analyzer in self.analyzers:
                violation = analyzer.analyze(entry)
                if violation is not None:
                    return violation

        return None

    @staticmethod
    def _size_violation(policy: Policy) -> PolicyViolation:
        return PolicyViolation(policy=policy, violation=ChartScannerConstants.MESSAGE_TOO_LARGE)

    def list_analyzers(self) -> list[str]:
        """Get names of all configured analyzers."""
        return [analyzer.get_name() for analyzer in self.analyzers]


def scan_chart(
    stream: BinaryIO,
    policy: ScanPolicy | None = None,
    archive_name: str = "<stream>",
    raise_on_violation: bool = False,
) -> ScanResult:
    """
    Convenience function to scan a single chart archive stream.

    Args:
        stream: Readable binary stream holding the archive
        policy: Optional scan policy
        archive_name: Label used in logs and in the result
        raise_on_violation: Raise PolicyViolationError instead of
            returning a result with a violation

    Returns:
        ScanResult
    """
    result = ChartScanner(policy=policy).scan(stream, archive_name=archive_name)
    if raise_on_violation:
        result.raise_for_violation()
    return result


def scan_chart_file(path: str | Path, policy: ScanPolicy | None = None) -> ScanResult:
    """Convenience function to scan a chart archive on disk."""
    return ChartScanner(policy=policy).scan_file(path)
