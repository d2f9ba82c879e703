import struct
import sys
from pathlib import Path

from nsbin_core.protocol import IDNS, NS_BUF_MAX, SIZE_FIELD_FMT


def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: make_stub_module.py <file> [buffer_size]")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    buffer = int(sys.argv[2], 0) if len(sys.argv) == 3 else NS_BUF_MAX

    # Identifier placed at the same offset as in the v1.2 stub (0x5D9).
    head = b"MZ" + b"\x90" * (0x5D9 - 2)
    site = IDNS.encode("ascii") + struct.pack(SIZE_FIELD_FMT, buffer, 0) + b"\x00" * buffer
    p.write_bytes(head + site + b"\xCC" * 64)
    print(f"Wrote stub module {p}: identifier at 0x{len(head):X}, buffer {buffer}")


if __name__ == "__main__":
    main()
