"""nsbin protocol constants.

Single source of truth for the on-disk patch site layout and marker format.
Keep this file stable. Patcher and reset must remain synchronized.
"""

# Placeholder namespace compiled into the module; located by byte search
IDNS = "D3F00FF1770DED978EC774BA389F2DC9"
DEFAULT_NS = "System.Runtime.InteropServices"

# Allocated payload size of the v1.2 stub module
NS_BUF_MAX = 0x01F4

# Patch site: [Identifier | Declared(2) | Preserved(2) | Payload(Declared)]
SIZE_FIELD_FMT = "<HH"
SIZE_FIELD_LEN = 4
UINT16_LEN = 2

# Declared buffer sizes FFFA - FFFF are reserved for future encodings
RESERVED_MIN = 0xFFFA
RESERVED_MAX = 0xFFFF

# The identifier must start inside this window
READ_WINDOW = 64 * 1024

DEFAULT_ENCODING = "utf-8"

# Sidecar marker
MARKER_SUFFIX = ".ddNSi"
MARKER_SCHEMA = "nsbin-marker-v1"
