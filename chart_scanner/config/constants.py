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
Constants for Chart Scanner.
"""

from pathlib import Path

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class ChartScannerConstants:
    """Constants used throughout the scanner."""

    # Version derived from pyproject.toml via hatch-vcs at install time.
    VERSION = PACKAGE_VERSION

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    PACKAGE_ROOT = Path(__file__).parent.parent

    # Resource paths
    DATA_DIR = PACKAGE_ROOT / "data"
    DEFAULT_POLICY_PATH = DATA_DIR / "default_policy.yaml"

    # Default limits
    DEFAULT_MAX_COMPRESSED_SIZE = 10 * 1024 * 1024  # 10 MiB
    DEFAULT_MAX_UNCOMPRESSED_SIZE = 10 * 1024 * 1024  # 10 MiB
    DEFAULT_INSPECTED_EXTENSIONS = frozenset({".md"})

    # Read granularity for the bounded reader
    READ_CHUNK_SIZE = 64 * 1024

    # Policy identifiers
    POLICY_COMPRESSED_ARCHIVE_SIZE = "compressed-archive-size"
    POLICY_UNCOMPRESSED_ARCHIVE_SIZE = "uncompressed-archive-size"
    POLICY_MALICIOUS_CONTENT = "malicious-content"

    # Violation messages
    MESSAGE_TOO_LARGE = "chart is too large"
    MESSAGE_MALICIOUS_CONTENT = "chart contains malicious content in file: "

    @classmethod
    def get_data_path(cls) -> Path:
        """Get path to data directory."""
        return cls.DATA_DIR
