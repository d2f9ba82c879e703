import struct
from pathlib import Path

import pytest

from nsbin_core.protocol import IDNS, SIZE_FIELD_FMT

PREFIX = b"MZ" + bytes(range(256)) * 2
SUFFIX = b"\xCC" * 32


def build_module(buffer: int = 0x2000, prefix: bytes = PREFIX, suffix: bytes = SUFFIX, payload_len: int | None = None) -> bytes:
    """[prefix][ID][buffer LE][0x0000][payload zeros][suffix]"""
    n = buffer if payload_len is None else payload_len
    return prefix + IDNS.encode("ascii") + struct.pack(SIZE_FIELD_FMT, buffer, 0) + b"\x00" * n + suffix


@pytest.fixture
def module_path(tmp_path) -> Path:
    p = tmp_path / "DllExport.dll"
    p.write_bytes(build_module())
    return p
