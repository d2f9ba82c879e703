"""nsbin Patch - Locate, patch and record the namespace site of a compiled module."""
from .errors import PatchError
from .logic import (
    NamespacePatcher,
    PatchReport,
    PatchState,
    apply_namespace,
    inspect_artifact,
    restore_from_marker,
)

__all__ = [
    "PatchError",
    "NamespacePatcher",
    "PatchReport",
    "PatchState",
    "apply_namespace",
    "inspect_artifact",
    "restore_from_marker",
]
