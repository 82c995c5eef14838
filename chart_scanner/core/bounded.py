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
Bounded reading of untrusted byte streams.

``bounded_copy`` never buffers more than ``limit`` bytes, no matter how
large the source is, and tells apart a stream that ended on its own from
one that was cut off by the limit.
"""

from __future__ import annotations

from typing import BinaryIO, NamedTuple

from ..config.constants import ChartScannerConstants


class BoundedRead(NamedTuple):
    """Bytes copied from a source and whether the source held more."""

    data: bytes
    exceeded: bool


def bounded_copy(source: BinaryIO, limit: int, chunk_size: int = ChartScannerConstants.READ_CHUNK_SIZE) -> BoundedRead:
    """
    Copy at most ``limit`` bytes from ``source`` into memory.

    A stream of exactly ``limit`` bytes is not exceeded: after the limit
    is reached a single extra byte is requested, and only its presence
    sets ``exceeded``. Nothing beyond that byte is read.

    Args:
        source: Readable binary stream
        limit: Maximum number of bytes to keep
        chunk_size: Size of individual reads

    Returns:
        BoundedRead with the copied bytes and the exceeded flag

    Raises:
        ValueError: If limit is negative
        OSError: Propagated from the source
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    buf = bytearray()
    while len(buf) < limit:
        chunk = source.read(min(chunk_size, limit - len(buf)))
        if not chunk:
            return BoundedRead(bytes(buf), False)
        buf += chunk

    return BoundedRead(bytes(buf), bool(source.read(1)))
