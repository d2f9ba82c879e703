"""nsbin Core - Shared layout constants and naming rule."""
from .names import is_valid_ns, ns_rule
from .protocol import DEFAULT_NS, IDNS

__all__ = ["is_valid_ns", "ns_rule", "DEFAULT_NS", "IDNS"]
