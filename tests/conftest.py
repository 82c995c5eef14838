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
Pytest configuration and shared fixtures.

Chart archives are built in memory with ``tarfile`` and ``gzip`` so every
test controls entry order, names, and content exactly.
"""

from __future__ import annotations

import gzip
import io
import tarfile
from collections.abc import Callable, Iterable

import pytest

from chart_scanner.core.scan_policy import ArchiveLimits, ContentPolicy, ScanPolicy
from chart_scanner.core.scanner import ChartScanner

SCRIPT_PAYLOAD = "<script>alert('pwned')</script>"


def build_tar(files: Iterable[tuple[str, bytes | str]]) -> bytes:
    """Build an uncompressed tar stream from ``(name, content)`` pairs, in order."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w", format=tarfile.GNU_FORMAT) as tf:
        for name, content in files:
            data = content.encode("utf-8") if isinstance(content, str) else content
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            info.mode = 0o644
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def build_chart(files: Iterable[tuple[str, bytes | str]] | dict[str, bytes | str]) -> bytes:
    """Build a gzip-compressed chart archive."""
    if isinstance(files, dict):
        files = list(files.items())
    return gzip.compress(build_tar(files))


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_chart() -> Callable[..., bytes]:
    """Factory that builds a ``.tgz`` chart archive from name/content pairs."""
    return build_chart


@pytest.fixture
def safe_chart() -> bytes:
    """A small chart with a plain README and templates."""
    return build_chart(
        [
            ("mychart/Chart.yaml", "apiVersion: v2\nname: mychart\nversion: 0.1.0\n"),
            ("mychart/values.yaml", "replicaCount: 1\n"),
            ("mychart/README.md", "# mychart\n\nA chart for **testing**.\n\n- one\n- two\n"),
            ("mychart/templates/deployment.yaml", "kind: Deployment\n"),
        ]
    )


@pytest.fixture
def malicious_chart() -> bytes:
    """A chart whose README carries a script injection."""
    return build_chart(
        [
            ("mychart/Chart.yaml", "apiVersion: v2\nname: mychart\nversion: 0.1.0\n"),
            ("mychart/README.md", f"# mychart\n\n{SCRIPT_PAYLOAD}\n\nInstall with helm.\n"),
        ]
    )


@pytest.fixture
def make_scanner() -> Callable[..., ChartScanner]:
    """Factory for scanners with explicit limits and extensions."""

    def _factory(
        max_compressed: int = 10 * 1024 * 1024,
        max_uncompressed: int = 10 * 1024 * 1024,
        extensions: Iterable[str] = (".md",),
    ) -> ChartScanner:
        policy = ScanPolicy(
            policy_name="test",
            limits=ArchiveLimits(
                max_compressed_size_bytes=max_compressed,
                max_uncompressed_size_bytes=max_uncompressed,
            ),
            content=ContentPolicy(inspected_extensions=frozenset(extensions)),
        )
        return ChartScanner(policy=policy)

    return _factory


@pytest.fixture
def scanner(make_scanner) -> ChartScanner:
    """Scanner with the baseline limits and ``.md`` inspection."""
    return make_scanner()


@pytest.fixture
def make_tar() -> Callable[..., bytes]:
    """Factory that builds an uncompressed tar stream from name/content pairs."""
    return build_tar
