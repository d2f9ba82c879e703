"""nsbin - Namespace naming rule."""
from __future__ import annotations

import re

from .protocol import DEFAULT_NS

_NS_SYNTAX = re.compile(r"[a-z_][a-z_0-9.]*", re.IGNORECASE | re.ASCII)
# left. ...  .right.
_NS_DOTS = re.compile(r"\.(\s*\.)+|\.\s*$")


def is_valid_ns(name: str | None) -> bool:
    """Check a namespace against identifier syntax."""
    if not name or not name.strip():
        return False
    return _NS_SYNTAX.fullmatch(name) is not None and _NS_DOTS.search(name) is None


def ns_rule(name: str | None) -> str:
    """Return the namespace to write: the name itself if valid, otherwise DEFAULT_NS."""
    if is_valid_ns(name):
        return name.replace(" ", "")
    return DEFAULT_NS
