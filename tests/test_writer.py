import io

import pytest

from nsbin_core.protocol import IDNS
from nsbin_patch.errors import NameTooLarge, WriteFailure
from nsbin_patch.writer import build_replacement, full_span, write_span

LEADING = IDNS.encode("ascii") + b"\x08\x00\x00\x00"


def test_full_span():
    assert full_span(32, 0x2000) == 32 + 4 + 0x2000
    assert full_span(32, 0) == 36


def test_replacement_keeps_leading_and_pads():
    out = build_replacement(LEADING, b"Ns", full_span(32, 8))
    assert out == LEADING + b"Ns" + b"\x00" * 6


def test_replacement_exact_fit():
    out = build_replacement(LEADING, b"ABCDEFGH", full_span(32, 8))
    assert out == LEADING + b"ABCDEFGH"


def test_replacement_never_truncates():
    with pytest.raises(NameTooLarge) as ei:
        build_replacement(LEADING, b"ABCDEFGHI", full_span(32, 8))
    assert ei.value.context == {"full_span": 44, "capacity": 8, "name_len": 9}


def test_write_span_only_touches_span():
    buf = io.BytesIO(b"\xAA" * 16)
    write_span(buf, 4, b"\x01\x02\x03")
    assert buf.getvalue() == b"\xAA" * 4 + b"\x01\x02\x03" + b"\xAA" * 9


class _BrokenStream(io.BytesIO):
    def write(self, b):
        raise OSError("disk full")


def test_write_span_reports_io_error():
    with pytest.raises(WriteFailure) as ei:
        write_span(_BrokenStream(b"\x00" * 8), 2, b"\x01")
    assert ei.value.context == {"offset": 2, "full_span": 1}
    assert "indeterminate" in str(ei.value)
