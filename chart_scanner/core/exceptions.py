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

"""Chart Scanner exceptions.

This module defines custom exceptions for Chart Scanner operations.
All exceptions inherit from ChartScannerError for easy catching.

Policy violations are normally *returned* as part of a ``ScanResult``;
``PolicyViolationError`` exists for callers that prefer a single error
channel.

Example:
    >>> from chart_scanner.core.scanner import ChartScanner
    >>> from chart_scanner.core.exceptions import ChartArchiveError
    >>>
    >>> scanner = ChartScanner()
    >>>
    >>> try:
    ...     with open("mychart-0.1.0.tgz", "rb") as fh:
    ...         result = scanner.scan(fh)
    ... except ChartArchiveError as e:
    ...     print(f"Unreadable chart: {e}")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import PolicyViolation


class ChartScannerError(Exception):
    """Base exception for all Chart Scanner errors."""

    pass


class ChartArchiveError(ChartScannerError):
    """Raised when a chart archive cannot be read or decoded.

    This is an input-integrity failure, not a policy violation:
    - The input stream could not be read
    - The data is not a gzip stream
    - The gzip stream is corrupt or truncated
    - The tar stream is malformed
    - A single entry could not be read from the tar stream

    The underlying cause is chained via ``raise ... from``.
    """

    READ = "failed to read chart archive"
    OPEN = "failed to open chart gzip archive"
    DECOMPRESS = "failed to decompress chart archive"
    EXTRACT = "failed to extract chart archive"

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.stage = stage or message

    @classmethod
    def for_entry(cls, name: str) -> ChartArchiveError:
        """Error for a single archive entry whose content could not be read."""
        return cls(f"failed to extract file {name!r} from chart archive", stage="extract-file")


class PolicyViolationError(ChartScannerError):
    """Raised when a caller asks for violations to be surfaced as exceptions."""

    def __init__(self, violation: PolicyViolation):
        super().__init__(violation.violation)
        self.violation = violation

    @property
    def policy(self):
        return self.violation.policy

    @property
    def context(self) -> str | None:
        return self.violation.context
