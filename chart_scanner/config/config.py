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
Configuration class for Chart Scanner.

Values left unset are read from ``CHART_SCANNER_*`` environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from ..core.scan_policy import ScanPolicy


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer number of bytes, got {raw!r}") from None


@dataclass
class Config:
    """
    Runtime configuration for Chart Scanner.

    ``policy`` selects a preset or YAML file; the size and extension
    fields, when set, override what that policy says.
    """

    # Policy selection
    policy: str | None = None

    # Overrides
    max_compressed_size_bytes: int | None = None
    max_uncompressed_size_bytes: int | None = None
    inspected_extensions: list[str] | None = None

    # Logging
    log_level: str = "WARNING"

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.policy is None:
            self.policy = os.getenv("CHART_SCANNER_POLICY") or None

        if self.max_compressed_size_bytes is None:
            self.max_compressed_size_bytes = _env_int("CHART_SCANNER_MAX_COMPRESSED_SIZE")

        if self.max_uncompressed_size_bytes is None:
            self.max_uncompressed_size_bytes = _env_int("CHART_SCANNER_MAX_UNCOMPRESSED_SIZE")

        if self.inspected_extensions is None:
            if env_exts := os.getenv("CHART_SCANNER_EXTENSIONS"):
                self.inspected_extensions = [e.strip() for e in env_exts.split(",") if e.strip()]

        # Log level from environment (only if still at default)
        if self.log_level == "WARNING":
            if env_level := os.getenv("CHART_SCANNER_LOG_LEVEL"):
                self.log_level = env_level.upper()

    def to_scan_policy(self) -> ScanPolicy:
        """Resolve the configured policy and apply any overrides."""
        return ScanPolicy.resolve(self.policy).with_overrides(
            max_compressed_size_bytes=self.max_compressed_size_bytes,
            max_uncompressed_size_bytes=self.max_uncompressed_size_bytes,
            inspected_extensions=self.inspected_extensions,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from .env file.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            with open(config_file) as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith("#") and "=" in line:
                        key, value = line.split("=", 1)
                        os.environ[key.strip()] = value.strip()

        return cls.from_env()
