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
Tests for configuration loading.
"""

from unittest.mock import patch

import pytest

from chart_scanner.config.config import Config
from chart_scanner.config.constants import ChartScannerConstants


class TestConfig:
    """Test Config class."""

    @patch.dict("os.environ", {}, clear=True)
    def test_config_defaults(self):
        """Test default configuration values."""
        config = Config()

        assert config.policy is None
        assert config.max_compressed_size_bytes is None
        assert config.max_uncompressed_size_bytes is None
        assert config.inspected_extensions is None
        assert config.log_level == "WARNING"

    @patch.dict(
        "os.environ",
        {
            "CHART_SCANNER_POLICY": "strict",
            "CHART_SCANNER_MAX_COMPRESSED_SIZE": "2048",
            "CHART_SCANNER_MAX_UNCOMPRESSED_SIZE": " 4096 ",
            "CHART_SCANNER_EXTENSIONS": ".md, .txt,,",
            "CHART_SCANNER_LOG_LEVEL": "debug",
        },
        clear=True,
    )
    def test_config_from_environment(self):
        """Test configuration loaded from environment variables."""
        config = Config.from_env()

        assert config.policy == "strict"
        assert config.max_compressed_size_bytes == 2048
        assert config.max_uncompressed_size_bytes == 4096
        assert config.inspected_extensions == [".md", ".txt"]
        assert config.log_level == "DEBUG"

    @patch.dict("os.environ", {"CHART_SCANNER_MAX_COMPRESSED_SIZE": "10MB"}, clear=True)
    def test_invalid_integer_names_variable(self):
        """A non-numeric size fails with the variable name in the message."""
        with pytest.raises(ValueError, match="CHART_SCANNER_MAX_COMPRESSED_SIZE"):
            Config.from_env()

    @patch.dict("os.environ", {"CHART_SCANNER_MAX_COMPRESSED_SIZE": "2048"}, clear=True)
    def test_explicit_values_win_over_environment(self):
        config = Config(max_compressed_size_bytes=100)

        assert config.max_compressed_size_bytes == 100

    @patch.dict("os.environ", {}, clear=True)
    def test_from_file(self, tmp_path):
        """Test loading a .env file."""
        env_file = tmp_path / ".env"
        env_file.write_text("# comment\nCHART_SCANNER_POLICY=permissive\nCHART_SCANNER_EXTENSIONS=.txt\n")

        config = Config.from_file(env_file)

        assert config.policy == "permissive"
        assert config.inspected_extensions == [".txt"]

    @patch.dict("os.environ", {}, clear=True)
    def test_from_missing_file_uses_environment(self, tmp_path):
        config = Config.from_file(tmp_path / "missing.env")

        assert config.policy is None


class TestToScanPolicy:
    """Test resolving a Config into a ScanPolicy."""

    @patch.dict("os.environ", {}, clear=True)
    def test_default_policy(self):
        policy = Config().to_scan_policy()

        assert policy.limits.max_compressed_size_bytes == ChartScannerConstants.DEFAULT_MAX_COMPRESSED_SIZE
        assert policy.content.inspected_extensions == frozenset({".md"})

    @patch.dict("os.environ", {}, clear=True)
    def test_overrides_apply_on_top_of_preset(self):
        """Explicit limits and extensions replace the preset's values."""
        config = Config(
            policy="strict",
            max_uncompressed_size_bytes=123,
            inspected_extensions=["yaml"],
        )

        policy = config.to_scan_policy()

        assert policy.policy_name == "strict"
        assert policy.limits.max_uncompressed_size_bytes == 123
        assert policy.content.inspected_extensions == frozenset({".yaml"})

    @patch.dict("os.environ", {}, clear=True)
    def test_unknown_policy_path(self):
        with pytest.raises(FileNotFoundError):
            Config(policy="/nonexistent/policy.yaml").to_scan_policy()


class TestConstants:
    """Test package constants."""

    def test_baseline_values(self):
        assert ChartScannerConstants.DEFAULT_MAX_COMPRESSED_SIZE == 10 * 1024 * 1024
        assert ChartScannerConstants.DEFAULT_MAX_UNCOMPRESSED_SIZE == 10 * 1024 * 1024
        assert ChartScannerConstants.MESSAGE_TOO_LARGE == "chart is too large"

    def test_data_path(self):
        assert (ChartScannerConstants.get_data_path() / "default_policy.yaml").is_file()
