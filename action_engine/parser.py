"""Turn raw JSON text or an already decoded object into a sequence value."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(slots=True)
class ParseResult:
    success: bool
    sequence: Any = None
    error: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "sequence": self.sequence}
        return {"success": False, "error": self.error}


def parse_action_sequence(raw: Any) -> ParseResult:
    """Decode ``raw`` if it is text; pass anything else through untouched.

    Parsing is not validation: a decoded value of the wrong shape is still a
    successful parse.  Failures are returned, never raised.
    """

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            return ParseResult(False, error=f"Failed to parse action sequence: {exc}")

    if not isinstance(raw, str):
        return ParseResult(True, sequence=raw)

    try:
        return ParseResult(True, sequence=json.loads(raw))
    except (ValueError, RecursionError) as exc:
        return ParseResult(False, error=f"Failed to parse action sequence: {exc}")
