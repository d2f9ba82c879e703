from __future__ import annotations

from typing import Any

from .const import ERRORS


class PatchError(Exception):
    """Base error. `context` holds the offsets and sizes needed to diagnose a run."""

    code = ""
    partial = False

    def __init__(self, detail: str | None = None, **context: Any):
        self.message = ERRORS[self.code]
        self.detail = detail
        self.context = context
        super().__init__(f"{self.message}: {detail}" if detail else self.message)

    def to_dict(self) -> dict:
        out = {"code": self.code, "message": self.message}
        if self.detail:
            out["detail"] = self.detail
        out.update(self.context)
        return out


class ArtifactNotFound(PatchError):
    code = "E_ARTIFACT_MISSING"


class ArtifactTooSmall(PatchError):
    code = "E_ARTIFACT_SMALL"


class IdentifierNotFound(PatchError):
    code = "E_IDENT_NOT_FOUND"


class UnsupportedReservedValue(PatchError):
    code = "E_RESERVED_VALUE"


class NameTooLarge(PatchError):
    code = "E_NAME_TOO_LARGE"


class UnsupportedEncoding(PatchError):
    code = "E_ENCODING"


class WriteFailure(PatchError):
    code = "E_WRITE_FAILED"


class PartialFailure(PatchError):
    """The module was modified; only the sidecar step failed."""

    partial = True

    def __init__(self, report, detail: str | None = None, **context: Any):
        self.report = report
        super().__init__(detail, **context)

    def to_dict(self) -> dict:
        out = super().to_dict()
        out["report"] = self.report.to_dict()
        return out


class MarkerWriteFailure(PartialFailure):
    code = "E_MARKER_WRITE"


class MarkerRemoveFailure(PartialFailure):
    code = "E_MARKER_REMOVE"


class MarkerNotFound(PatchError):
    code = "E_MARKER_MISSING"


class MarkerInvalid(PatchError):
    code = "E_MARKER_INVALID"


class MarkerMismatch(PatchError):
    code = "E_MARKER_MISMATCH"
