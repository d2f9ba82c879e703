"""nsbin - Namespace patcher for compiled modules.

The module carries a placeholder namespace (IDNS) followed by a size field and
a reserved buffer:

    [Identifier | Declared u16 LE | Preserved u16 | Payload (Declared bytes)]

Patching keeps the identifier and size field as they are and rewrites the
payload with the new namespace plus zero padding, in a single write covering
the whole span. A sidecar marker records where and what was written.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from warnings import warn

from nsbin_core.names import ns_rule
from nsbin_core.protocol import DEFAULT_ENCODING, IDNS, SIZE_FIELD_LEN

from .errors import (
    ArtifactNotFound,
    ArtifactTooSmall,
    MarkerMismatch,
    MarkerRemoveFailure,
    MarkerWriteFailure,
    PatchError,
)
from .locate import find_identifier, sysrange
from .marker import marker_path, marker_record, read_marker, write_marker
from .reader import ByteReader, check_encoding
from .writer import build_replacement, full_span, write_span

logger = logging.getLogger(__name__)


class PatchState(str, Enum):
    IDLE = "IDLE"
    LOCATING = "LOCATING"
    VALIDATING = "VALIDATING"
    WRITING = "WRITING"
    RECORDING = "RECORDING"
    DONE = "DONE"
    FAILED = "FAILED"
    PARTIALLY_DONE = "PARTIALLY_DONE"


@dataclass
class PatchSite:
    offset: int
    ident_len: int
    declared: int
    full_span: int

    @property
    def payload_offset(self) -> int:
        return self.offset + self.ident_len + SIZE_FIELD_LEN


@dataclass
class PatchReport:
    target: Path
    offset: int
    declared_buffer: int
    full_span: int
    name: str
    encoding: str
    marker: Path | None = None
    state: PatchState = PatchState.DONE

    def to_dict(self) -> dict:
        return {
            "target": str(self.target),
            "offset": self.offset,
            "declared_buffer": self.declared_buffer,
            "full_span": self.full_span,
            "name": self.name,
            "encoding": self.encoding,
            "marker": str(self.marker) if self.marker else None,
            "state": self.state.value,
        }


@dataclass
class SiteInfo:
    target: Path
    offset: int
    declared_buffer: int
    full_span: int
    payload: str
    empty: bool

    def to_dict(self) -> dict:
        return {
            "target": str(self.target),
            "offset": self.offset,
            "declared_buffer": self.declared_buffer,
            "full_span": self.full_span,
            "payload": self.payload,
            "empty": self.empty,
        }


class NamespacePatcher:
    """Owns a single read/write handle on the target for the length of one run."""

    def __init__(self, target: Path, encoding: str = DEFAULT_ENCODING, writable: bool = True):
        self.target = Path(target)
        self.encoding = encoding
        self.writable = writable
        self.state = PatchState.IDLE
        self._f = None
        self.reader: ByteReader | None = None

    def open(self) -> "NamespacePatcher":
        try:
            check_encoding(self.encoding)
            if not self.target.is_file():
                raise ArtifactNotFound(path=str(self.target))
            try:
                self._f = open(self.target, "r+b" if self.writable else "rb")
            except OSError as e:
                raise ArtifactNotFound(str(e), path=str(self.target)) from e
        except PatchError:
            self.state = PatchState.FAILED
            raise
        self.reader = ByteReader(self._f, self.encoding)
        return self

    def close(self) -> None:
        if self._f is not None:
            self._f.close()
            self._f = None
            self.reader = None

    def __enter__(self) -> "NamespacePatcher":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _locate(self) -> PatchSite:
        if self.reader is None:
            raise RuntimeError("NamespacePatcher is not open")
        self.state = PatchState.LOCATING
        ident = self.reader.get_bytes_from(IDNS)
        lpos = find_identifier(self.reader.read_first_64k(), ident)

        self.state = PatchState.VALIDATING
        self.reader.seek(lpos + len(ident))
        try:
            declared = sysrange(self.reader.read_uint16())
        except EOFError as e:
            raise ArtifactTooSmall(str(e), offset=lpos, ident_len=len(ident)) from e

        span = full_span(len(ident), declared)
        size = self.reader.size()
        if lpos + span > size:
            raise ArtifactTooSmall(
                "reserved span runs past end of file",
                offset=lpos,
                full_span=span,
                file_size=size,
            )

        logger.debug("binmod: lpos(%d); ident(%d); buffer(%d); fullseq(%d)", lpos, len(ident), declared, span)
        return PatchSite(lpos, len(ident), declared, span)

    def _replacement(self, site: PatchSite, name_bytes: bytes) -> bytes:
        leading = self.reader.read_at(site.offset, site.ident_len + SIZE_FIELD_LEN)
        return build_replacement(leading, name_bytes, site.full_span)

    def _write(self, site: PatchSite, replacement: bytes) -> None:
        self.state = PatchState.WRITING
        write_span(self.reader.base_stream, site.offset, replacement)

    def apply(self, desired: str | None) -> PatchReport:
        """Write `desired` (or DEFAULT_NS if invalid) into the module and record a marker."""
        ns = ns_rule(desired)
        if ns != desired:
            logger.info("namespace %r is not valid, using %r", desired, ns)
        logger.debug("set new namespace: (%s) - (%s)", ns, self.target)

        try:
            site = self._locate()
            replacement = self._replacement(site, ns.encode(self.encoding))
            self._write(site, replacement)
        except PatchError:
            self.state = PatchState.FAILED
            raise

        report = PatchReport(
            target=self.target,
            offset=site.offset,
            declared_buffer=site.declared,
            full_span=site.full_span,
            name=ns,
            encoding=self.encoding,
        )

        self.state = PatchState.RECORDING
        try:
            report.marker = write_marker(
                self.target, marker_record(site.offset, site.declared, ns, self.encoding)
            )
        except OSError as e:
            self.state = report.state = PatchState.PARTIALLY_DONE
            warn(f"Module {self.target} patched but marker was not written: {e}")
            raise MarkerWriteFailure(report, str(e), path=str(marker_path(self.target))) from e

        self.state = PatchState.DONE
        logger.info("namespace '%s' written to %s at %d", ns, self.target, site.offset)
        return report

    def inspect(self) -> SiteInfo:
        """Locate the patch site and decode the current payload. Read-only."""
        try:
            site = self._locate()
            payload = self.reader.read_at(site.payload_offset, site.declared)
        except PatchError:
            self.state = PatchState.FAILED
            raise
        self.state = PatchState.IDLE

        text = payload.split(b"\x00", 1)[0].decode(self.encoding, errors="replace")
        return SiteInfo(
            target=self.target,
            offset=site.offset,
            declared_buffer=site.declared,
            full_span=site.full_span,
            payload=text,
            empty=not any(payload),
        )

    def reset(self, record: dict) -> PatchReport:
        """Zero the payload described by a marker record."""
        try:
            site = self._locate()
            if site.offset != record["ns_position"] or site.declared != record["ns_buffer"]:
                raise MarkerMismatch(
                    expected_offset=record["ns_position"],
                    actual_offset=site.offset,
                    expected_buffer=record["ns_buffer"],
                    actual_buffer=site.declared,
                )
            self._write(site, self._replacement(site, b""))
        except PatchError:
            self.state = PatchState.FAILED
            raise

        self.state = PatchState.DONE
        logger.info("namespace payload cleared in %s at %d", self.target, site.offset)
        return PatchReport(
            target=self.target,
            offset=site.offset,
            declared_buffer=site.declared,
            full_span=site.full_span,
            name="",
            encoding=self.encoding,
        )


def apply_namespace(target: Path, desired: str | None, encoding: str = DEFAULT_ENCODING) -> PatchReport:
    with NamespacePatcher(target, encoding) as patcher:
        return patcher.apply(desired)


def inspect_artifact(target: Path, encoding: str = DEFAULT_ENCODING) -> SiteInfo:
    with NamespacePatcher(target, encoding, writable=False) as patcher:
        return patcher.inspect()


def restore_from_marker(target: Path) -> PatchReport:
    """Clear a previously applied namespace and drop its marker."""
    record = read_marker(target)
    with NamespacePatcher(target, record["encoding"]) as patcher:
        report = patcher.reset(record)

    path = marker_path(target)
    try:
        path.unlink()
    except OSError as e:
        report.state = PatchState.PARTIALLY_DONE
        warn(f"Module {target} reset but marker was not removed: {e}")
        raise MarkerRemoveFailure(report, str(e), path=str(path)) from e
    return report
