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
Data models for chart archives and policy violations.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .exceptions import PolicyViolationError


class Policy(str, Enum):
    """Identifiers of the policies a chart archive can violate."""

    COMPRESSED_ARCHIVE_SIZE = "compressed-archive-size"
    UNCOMPRESSED_ARCHIVE_SIZE = "uncompressed-archive-size"
    MALICIOUS_CONTENT = "malicious-content"

    @property
    def is_size_policy(self) -> bool:
        return self in (Policy.COMPRESSED_ARCHIVE_SIZE, Policy.UNCOMPRESSED_ARCHIVE_SIZE)


@dataclass(frozen=True)
class PolicyViolation:
    """The single failure outcome of a scan.

    Size violations carry only ``policy`` and ``violation``; content
    violations also carry the rendered patch in ``context``.
    """

    policy: Policy
    violation: str
    context: str | None = None

    def __str__(self) -> str:
        return self.violation

    def to_dict(self) -> dict[str, Any]:
        """Convert violation to dictionary."""
        return {
            "policy": self.policy.value,
            "violation": self.violation,
            "context": self.context,
        }


@dataclass
class ArchiveEntry:
    """A named entry produced while walking a chart archive.

    Content is not read until :meth:`read` is called, so entries that
    are filtered out never have their bytes materialised.
    """

    name: str
    size: int = 0
    is_file: bool = True
    _reader: Callable[[], bytes] | None = field(default=None, repr=False, compare=False)

    def read(self) -> bytes:
        """Read the full entry content."""
        if self._reader is None or not self.is_file:
            return b""
        return self._reader()

    def read_text(self) -> str:
        """Read the entry content as UTF-8, replacing undecodable bytes."""
        return self.read().decode("utf-8", errors="replace")


@dataclass
class ScanResult:
    """Outcome of scanning one chart archive."""

    archive_name: str
    violation: PolicyViolation | None = None
    entries_scanned: int = 0
    entries_inspected: int = 0
    scan_duration_seconds: float = 0.0
    policy_name: str | None = None
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_safe(self) -> bool:
        """Check if the archive passed all policies."""
        return self.violation is None

    @property
    def policy(self) -> Policy | None:
        """The violated policy, if any."""
        return self.violation.policy if self.violation else None

    def raise_for_violation(self) -> None:
        """Raise :class:`PolicyViolationError` if the scan found a violation."""
        if self.violation is not None:
            raise PolicyViolationError(self.violation)

    def to_dict(self) -> dict[str, Any]:
        """Convert scan result to dictionary."""
        return {
            "archive_name": self.archive_name,
            "is_safe": self.is_safe,
            "violation": self.violation.to_dict() if self.violation else None,
            "entries_scanned": self.entries_scanned,
            "entries_inspected": self.entries_inspected,
            "scan_duration_seconds": self.scan_duration_seconds,
            "duration_ms": int(self.scan_duration_seconds * 1000),
            "policy_name": self.policy_name,
            "timestamp": self.timestamp.isoformat(),
        }
