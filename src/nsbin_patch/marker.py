from __future__ import annotations

import json
import logging
from pathlib import Path

from nsbin_core.protocol import MARKER_SCHEMA, MARKER_SUFFIX

from .errors import MarkerInvalid, MarkerNotFound, UnsupportedEncoding
from .reader import check_encoding

logger = logging.getLogger(__name__)

CANONICAL_JSON_KW = {"sort_keys": True, "separators": (",", ":"), "ensure_ascii": False}

MARKER_FIELDS = ("ns_position", "ns_buffer", "ns_name", "encoding")


def _canonical_json_bytes(obj) -> bytes:
    return json.dumps(obj, **CANONICAL_JSON_KW).encode("utf-8")


def marker_path(target: Path) -> Path:
    target = Path(target)
    return target.with_name(target.name + MARKER_SUFFIX)


def marker_record(ns_position: int, ns_buffer: int, ns_name: str, encoding: str) -> dict:
    return {
        "schema": MARKER_SCHEMA,
        "ns_position": int(ns_position),
        "ns_buffer": int(ns_buffer),
        "ns_name": ns_name,
        "encoding": encoding,
    }


def write_marker(target: Path, record: dict) -> Path:
    """Write the sidecar for `target`, replacing any previous one. OSError propagates."""
    path = marker_path(target)
    path.write_bytes(_canonical_json_bytes(record))
    logger.debug("marker written: %s", path)
    return path


def read_marker(target: Path) -> dict:
    path = marker_path(target)
    if not path.is_file():
        raise MarkerNotFound(path=str(path))

    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise MarkerInvalid(str(e), path=str(path)) from e

    if not isinstance(record, dict) or record.get("schema") != MARKER_SCHEMA:
        raise MarkerInvalid("unknown schema", path=str(path))

    missing = [k for k in MARKER_FIELDS if k not in record]
    if missing:
        raise MarkerInvalid(f"missing fields: {', '.join(missing)}", path=str(path))

    for k in ("ns_position", "ns_buffer"):
        if isinstance(record[k], bool) or not isinstance(record[k], int) or record[k] < 0:
            raise MarkerInvalid(f"{k} must be a non-negative integer", path=str(path))

    if not isinstance(record["ns_name"], str):
        raise MarkerInvalid("ns_name must be a string", path=str(path))

    try:
        check_encoding(record["encoding"])
    except UnsupportedEncoding as e:
        raise MarkerInvalid(str(e), path=str(path)) from e

    return record
