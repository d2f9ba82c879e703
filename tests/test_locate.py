import io

import pytest

from nsbin_core.protocol import IDNS, READ_WINDOW
from nsbin_patch.errors import ArtifactTooSmall, IdentifierNotFound, UnsupportedEncoding, UnsupportedReservedValue
from nsbin_patch.locate import find_identifier, sysrange
from nsbin_patch.reader import ByteReader, check_encoding

from conftest import PREFIX, build_module

IDENT = IDNS.encode("ascii")


def test_identifier_found_at_offset():
    assert find_identifier(build_module(), IDENT) == len(PREFIX)


def test_first_occurrence_wins():
    data = IDENT + b"\x00" * 4 + build_module()
    assert find_identifier(data, IDENT) == 0


def test_window_shorter_than_identifier():
    with pytest.raises(ArtifactTooSmall) as ei:
        find_identifier(IDENT[:-1], IDENT)
    assert ei.value.context == {"window_len": 31, "ident_len": 32}


def test_identifier_missing():
    with pytest.raises(IdentifierNotFound):
        find_identifier(b"\x00" * 1024, IDENT)


def test_identifier_outside_window_is_not_found():
    data = b"\x00" * READ_WINDOW + build_module(prefix=b"")
    reader = ByteReader(io.BytesIO(data), "ascii")
    window = reader.read_first_64k()
    assert len(window) == READ_WINDOW
    with pytest.raises(IdentifierNotFound):
        find_identifier(window, IDENT)


@pytest.mark.parametrize("value", [0, 1, 0x01F4, 0x2000, 0xFFF9])
def test_sysrange_passes_supported_values(value):
    assert sysrange(value) == value


@pytest.mark.parametrize("value", [0xFFFA, 0xFFFB, 0xFFFC, 0xFFFD, 0xFFFE, 0xFFFF])
def test_sysrange_rejects_reserved_values(value):
    with pytest.raises(UnsupportedReservedValue) as ei:
        sysrange(value)
    assert ei.value.context["reserved"] == 0xFFFF - value
    assert ei.value.context["value"] == value


def test_reader_uint16_is_little_endian():
    reader = ByteReader(io.BytesIO(b"\x00\x20\xff"), "ascii")
    assert reader.read_uint16() == 0x2000
    with pytest.raises(EOFError):
        reader.read_uint16()


@pytest.mark.parametrize("encoding", ["utf-8", "ascii", "latin-1", "utf-16-le", "UTF-32-BE", "cp1252"])
def test_check_encoding_accepts_plain_codecs(encoding):
    assert check_encoding(encoding)


@pytest.mark.parametrize("encoding", ["no-such-enc", "", None, "rot13", "utf-16", "utf-32", "utf-8-sig"])
def test_check_encoding_rejects_unusable_codecs(encoding):
    with pytest.raises(UnsupportedEncoding):
        check_encoding(encoding)
