from __future__ import annotations

import logging
import os
from typing import BinaryIO

from nsbin_core.protocol import SIZE_FIELD_LEN

from .errors import NameTooLarge, WriteFailure

logger = logging.getLogger(__name__)


def full_span(ident_len: int, declared: int) -> int:
    """Bytes owned by the patch site: identifier + size field + payload."""
    return ident_len + SIZE_FIELD_LEN + declared


def build_replacement(leading: bytes, name_bytes: bytes, span: int) -> bytes:
    """Build exactly `span` bytes: `leading` unchanged, then the name, then zero padding.

    `leading` is the identifier plus the size field as read from the module.
    """
    capacity = span - len(leading)
    if len(name_bytes) > capacity:
        raise NameTooLarge(
            f"{len(name_bytes)} bytes do not fit into {capacity}",
            full_span=span,
            capacity=capacity,
            name_len=len(name_bytes),
        )

    out = bytearray(span)
    out[: len(leading)] = leading
    out[len(leading) : len(leading) + len(name_bytes)] = name_bytes
    return bytes(out)


def write_span(stream: BinaryIO, offset: int, replacement: bytes) -> None:
    """Overwrite the span at `offset` with one contiguous write."""
    try:
        stream.seek(offset, os.SEEK_SET)
        written = stream.write(replacement)
        stream.flush()
    except OSError as e:
        raise WriteFailure(str(e), offset=offset, full_span=len(replacement)) from e

    if written is not None and written != len(replacement):
        raise WriteFailure(
            "short write",
            offset=offset,
            full_span=len(replacement),
            written=written,
        )
    logger.debug("wrote %d bytes at %d", len(replacement), offset)
