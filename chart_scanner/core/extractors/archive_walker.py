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
Decompression and sequential traversal of chart archives.

A chart archive is a gzip-compressed tar stream. Both the compressed and
the decompressed stream are copied through :func:`bounded_copy`, so at
most one limit's worth of bytes is ever held per stage. Entries are then
produced one at a time in archive order.
"""

import gzip
import io
import logging
import tarfile
import zlib
from collections.abc import Iterator
from functools import partial
from typing import BinaryIO

from ..bounded import BoundedRead, bounded_copy
from ..exceptions import ChartArchiveError
from ..models import ArchiveEntry
from ..scan_policy import ArchiveLimits

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"
GZIP_METHOD_DEFLATE = 8
GZIP_FIXED_HEADER_SIZE = 10
GZIP_FHCRC = 0x02
GZIP_FEXTRA = 0x04
GZIP_FNAME = 0x08
GZIP_FCOMMENT = 0x10
GZIP_RESERVED_FLAGS = 0xE0


def gzip_header_length(data: bytes) -> int | None:
    """
    Return the length of the gzip member header at the start of *data*.

    Returns ``None`` when the header is not a complete, well-formed
    deflate header: bad magic, another method, reserved flag bits set,
    an optional field cut short, or a header CRC that does not match.
    """
    if len(data) < GZIP_FIXED_HEADER_SIZE or data[:2] != GZIP_MAGIC or data[2] != GZIP_METHOD_DEFLATE:
        return None
    flags = data[3]
    if flags & GZIP_RESERVED_FLAGS:
        return None

    pos = GZIP_FIXED_HEADER_SIZE
    if flags & GZIP_FEXTRA:
        if len(data) < pos + 2:
            return None
        pos += 2 + int.from_bytes(data[pos : pos + 2], "little")
    for flag in (GZIP_FNAME, GZIP_FCOMMENT):
        if flags & flag:
            end = data.find(b"\x00", pos)
            if end < 0:
                return None
            pos = end + 1
    if flags & GZIP_FHCRC:
        if len(data) < pos + 2:
            return None
        if zlib.crc32(data[:pos]) & 0xFFFF != int.from_bytes(data[pos : pos + 2], "little"):
            return None
        pos += 2
    if pos > len(data):
        return None
    return pos


def _is_clean_end(rest: bytes) -> bool:
    # What follows the last member must be nothing, or zero blocks.
    trailer = rest[: 2 * tarfile.BLOCKSIZE]
    return len(trailer) % tarfile.BLOCKSIZE == 0 and not trailer.strip(b"\x00")


class ArchiveWalker:
    """
    Reads a chart archive within fixed size limits and walks its entries.

    The walker holds no per-scan state; one instance can serve any number
    of independent streams.
    """

    def __init__(self, limits: ArchiveLimits | None = None):
        self.limits = limits or ArchiveLimits()

    def read_compressed(self, stream: BinaryIO) -> BoundedRead:
        """Copy the raw archive, bounded by the compressed size limit."""
        try:
            result = bounded_copy(stream, self.limits.max_compressed_size_bytes)
        except OSError as e:
            raise ChartArchiveError(ChartArchiveError.READ, stage="read") from e
        logger.debug("Read %d compressed bytes (exceeded=%s)", len(result.data), result.exceeded)
        return result

    def decompress(self, data: bytes) -> BoundedRead:
        """
        Decompress a gzip buffer, bounded by the uncompressed size limit.

        The gzip stream is closed before returning, whether or not the
        bounded read succeeded.

        Raises:
            ChartArchiveError: If the header is not a gzip header, or the
                compressed data is corrupt or truncated
        """
        if gzip_header_length(data) is None:
            raise ChartArchiveError(ChartArchiveError.OPEN, stage="open")

        try:
            with gzip.GzipFile(fileobj=io.BytesIO(data), mode="rb") as gz:
                result = bounded_copy(gz, self.limits.max_uncompressed_size_bytes)
        except (OSError, EOFError, zlib.error) as e:
            raise ChartArchiveError(ChartArchiveError.DECOMPRESS, stage="decompress") from e

        logger.debug("Decompressed %d bytes (exceeded=%s)", len(result.data), result.exceeded)
        return result

    def iter_entries(self, data: bytes) -> Iterator[ArchiveEntry]:
        """
        Yield the entries of a tar buffer in archive order.

        This is a single forward pass. An entry's content must be read
        before the iterator is advanced; afterwards the stream has moved
        past it. An empty buffer holds no entries.

        Raises:
            ChartArchiveError: If the tar stream is malformed or truncated
        """
        if not data:
            return

        try:
            tar = tarfile.open(fileobj=io.BytesIO(data), mode="r|")
        except tarfile.TarError as e:
            raise ChartArchiveError(ChartArchiveError.EXTRACT, stage="extract") from e

        with tar:
            while True:
                try:
                    member = tar.next()
                except tarfile.TarError as e:
                    raise ChartArchiveError(ChartArchiveError.EXTRACT, stage="extract") from e
                if member is None:
                    # next() also returns None for a bad header after the first member
                    if not _is_clean_end(data[tar.offset :]):
                        raise ChartArchiveError(ChartArchiveError.EXTRACT, stage="extract")
                    return

                yield ArchiveEntry(
                    name=member.name,
                    size=member.size,
                    is_file=member.isfile(),
                    _reader=partial(self._read_member, tar, member),
                )

    @staticmethod
    def _read_member(tar: tarfile.TarFile, member: tarfile.TarInfo) -> bytes:
        try:
            fileobj = tar.extractfile(member)
            if fileobj is None:
                return b""
            with fileobj:
                return fileobj.read()
        except (tarfile.TarError, OSError, EOFError) as e:
            raise ChartArchiveError.for_entry(member.name) from e
