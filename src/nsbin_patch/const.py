ERRORS = {
  "E_ARTIFACT_MISSING": "Target module missing or unreadable",
  "E_ARTIFACT_SMALL": "Target module too small to hold the patch site",
  "E_IDENT_NOT_FOUND": "Namespace identifier not found; unsupported module",
  "E_RESERVED_VALUE": "Declared buffer size uses a reserved value",
  "E_NAME_TOO_LARGE": "Encoded namespace exceeds the declared buffer",
  "E_WRITE_FAILED": "Patch write failed; module may be in an indeterminate state",
  "E_ENCODING": "Text encoding unknown or not usable for the patch site",
  "E_MARKER_WRITE": "Module patched but marker file could not be written",
  "E_MARKER_REMOVE": "Module reset but marker file could not be removed",
  "E_MARKER_MISSING": "Marker file not found",
  "E_MARKER_INVALID": "Marker file invalid",
  "E_MARKER_MISMATCH": "Marker does not describe the current module",
}
