from __future__ import annotations

import codecs
import os
import struct
from typing import BinaryIO

from nsbin_core.protocol import READ_WINDOW, UINT16_LEN

from .errors import UnsupportedEncoding


def check_encoding(encoding: str) -> str:
    """Return the canonical codec name, rejecting unknown, non-text and BOM-emitting codecs."""
    if not isinstance(encoding, str) or not encoding:
        raise UnsupportedEncoding("encoding must be a non-empty string", encoding=repr(encoding))
    try:
        name = codecs.lookup(encoding).name
        one, two = "A".encode(encoding), "AA".encode(encoding)
    except (LookupError, ValueError) as e:
        raise UnsupportedEncoding(str(e), encoding=encoding) from e
    # utf-16, utf-32 and utf-8-sig prefix every encoded string with a byte order mark
    if not one or len(two) != 2 * len(one):
        raise UnsupportedEncoding("codec emits a byte order mark; use an explicit -le/-be form", encoding=encoding)
    return name


class ByteReader:
    """Seek/read view over a binary stream.

    Works over an open file or an in-memory buffer; the stream is not closed here.
    """

    def __init__(self, stream: BinaryIO, encoding: str):
        self.stream = stream
        self.encoding = encoding

    @property
    def base_stream(self) -> BinaryIO:
        return self.stream

    def get_bytes_from(self, text: str) -> bytes:
        return text.encode(self.encoding)

    def seek(self, offset: int) -> int:
        return self.stream.seek(offset, os.SEEK_SET)

    def size(self) -> int:
        pos = self.stream.tell()
        end = self.stream.seek(0, os.SEEK_END)
        self.stream.seek(pos, os.SEEK_SET)
        return end

    def read_first_64k(self) -> bytes:
        self.stream.seek(0, os.SEEK_SET)
        return self.stream.read(READ_WINDOW)

    def read_exact(self, n: int) -> bytes:
        data = self.stream.read(n)
        if len(data) != n:
            raise EOFError(f"Wanted {n} bytes at offset {self.stream.tell() - len(data)}, got {len(data)}")
        return data

    def read_at(self, offset: int, n: int) -> bytes:
        self.seek(offset)
        return self.read_exact(n)

    def read_uint16(self) -> int:
        return struct.unpack("<H", self.read_exact(UINT16_LEN))[0]

    @staticmethod
    def find_bytes(needle: bytes, data: bytes) -> int:
        if not needle:
            return -1
        return data.find(needle)
