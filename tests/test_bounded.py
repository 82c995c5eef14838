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

"""Tests for the bounded reader."""

import io

import pytest

from chart_scanner.core.bounded import BoundedRead, bounded_copy


class CountingStream(io.RawIOBase):
    """Endless stream of ``x`` bytes that records how much was requested."""

    def __init__(self, max_read: int | None = None):
        self.consumed = 0
        self.max_read = max_read

    def readable(self):
        return True

    def read(self, size=-1):
        if size is None or size < 0:
            raise AssertionError("unbounded read requested")
        if self.max_read is not None:
            size = min(size, self.max_read)
        self.consumed += size
        return b"x" * size


class TestBoundedCopy:
    """Test truncation vs natural end-of-stream detection."""

    def test_shorter_than_limit(self):
        """A stream that ends before the limit is not exceeded."""
        result = bounded_copy(io.BytesIO(b"hello"), 10)

        assert result == BoundedRead(b"hello", False)

    def test_exactly_at_limit_is_not_exceeded(self):
        """Meeting the limit exactly and then ending cleanly is not a violation."""
        result = bounded_copy(io.BytesIO(b"a" * 10), 10)

        assert result.data == b"a" * 10
        assert result.exceeded is False

    def test_one_byte_over_limit_is_exceeded(self):
        """A single byte beyond the limit sets the exceeded flag."""
        result = bounded_copy(io.BytesIO(b"a" * 11), 10)

        assert result.data == b"a" * 10
        assert result.exceeded is True

    def test_empty_stream(self):
        """An empty stream yields no data and is not exceeded."""
        assert bounded_copy(io.BytesIO(b""), 10) == BoundedRead(b"", False)

    def test_zero_limit(self):
        """With a zero limit any byte at all exceeds the bound."""
        assert bounded_copy(io.BytesIO(b""), 0) == BoundedRead(b"", False)
        assert bounded_copy(io.BytesIO(b"a"), 0) == BoundedRead(b"", True)

    def test_never_reads_past_limit_plus_one(self):
        """An endless source is read for at most limit + 1 bytes."""
        stream = CountingStream()

        result = bounded_copy(stream, 1000, chunk_size=64)

        assert result.exceeded is True
        assert len(result.data) == 1000
        assert stream.consumed == 1001

    def test_short_reads_are_accumulated(self):
        """Sources that return fewer bytes than requested are handled."""
        stream = CountingStream(max_read=3)

        result = bounded_copy(stream, 10)

        assert len(result.data) == 10
        assert result.exceeded is True

    def test_chunked_read_across_boundary(self):
        """Chunk size does not affect where the limit falls."""
        data = bytes(range(256)) * 4
        result = bounded_copy(io.BytesIO(data), 1000, chunk_size=7)

        assert result.data == data[:1000]
        assert result.exceeded is True

    def test_negative_limit_rejected(self):
        """A negative limit is a programming error."""
        with pytest.raises(ValueError):
            bounded_copy(io.BytesIO(b"a"), -1)

    def test_source_errors_propagate(self):
        """I/O errors from the source are not swallowed."""

        class BrokenStream(io.RawIOBase):
            def readable(self):
                return True

            def read(self, size=-1):
                raise OSError("connection reset")

        with pytest.raises(OSError, match="connection reset"):
            bounded_copy(BrokenStream(), 10)
