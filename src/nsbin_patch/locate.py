from __future__ import annotations

import logging

from nsbin_core.protocol import RESERVED_MAX, RESERVED_MIN

from .errors import ArtifactTooSmall, IdentifierNotFound, UnsupportedReservedValue
from .reader import ByteReader

logger = logging.getLogger(__name__)


def find_identifier(window: bytes, ident: bytes) -> int:
    """Return the offset of the first `ident` in `window`.

    Raises ArtifactTooSmall when the window cannot hold the identifier and
    IdentifierNotFound when it holds no match.
    """
    if len(window) < len(ident):
        raise ArtifactTooSmall(
            "read window shorter than identifier",
            window_len=len(window),
            ident_len=len(ident),
        )

    lpos = ByteReader.find_bytes(ident, window)
    if lpos == -1:
        raise IdentifierNotFound(window_len=len(window), ident_len=len(ident))

    logger.debug("identifier at %d (len %d)", lpos, len(ident))
    return lpos


def sysrange(value: int) -> int:
    """Validate a declared buffer size against the reserved range FFFA - FFFF."""
    if value < RESERVED_MIN:
        return value

    reserved = RESERVED_MAX - value
    raise UnsupportedReservedValue(
        f"reserved combination {reserved} is not supported",
        value=value,
        reserved=reserved,
    )
