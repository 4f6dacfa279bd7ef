"""Free-standing helpers shared by the TL parser."""

from __future__ import annotations

import re
import zlib

_WHITESPACE = re.compile(r"\s+")
_TRUE_FLAG = "?true"


def canonicalize(definition: str) -> str:
    """Return the textual form whose CRC-32 is the definition identifier."""
    representation = _WHITESPACE.sub(" ", definition).strip()
    representation = (
        representation.replace(":bytes ", ": string")
        .replace("?bytes ", "? string")
        .replace("<", " ")
        .replace(">", "")
        .replace("{", "")
        .replace("}", "")
    )

    # Drop every ` name:flags.N?true` fragment back to its leading space.
    pos = representation.find(_TRUE_FLAG)
    while pos != -1:
        space = max(representation.rfind(" ", 0, pos), 0)
        representation = representation[:space] + representation[pos + len(_TRUE_FLAG) :]
        pos = representation.find(_TRUE_FLAG)

    return representation


def infer_id(definition: str) -> int:
    """Infer the 32-bit identifier of a definition from its text."""
    return zlib.crc32(canonicalize(definition).encode("utf-8")) & 0xFFFFFFFF


__all__ = ["canonicalize", "infer_id"]
