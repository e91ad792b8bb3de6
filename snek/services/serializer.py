"""Request body serialization and response body parsing."""
from __future__ import annotations
from collections.abc import Mapping
import json
from typing import Any, Dict, List, Optional, Union
from urllib.parse import parse_qs, urlencode
from snek.utils.constants import FORM_MARKER, FORM_TYPE, JSON_MARKER

def is_structured(data: Any) -> bool:
    """Whether a body value needs serialization (mapping or sequence)."""
    return isinstance(data, (Mapping, list, tuple))

def to_json(data: Any) -> str:
    """Compact JSON text, e.g. {"a":1}."""
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)

def _is_pairs(data: Any) -> bool:
    return all(isinstance(item, (list, tuple)) and len(item) == 2 for item in data)

def to_form(data: Any) -> str:
    """URL-encoded form string; list values repeat the key.

    A plain sequence is keyed by position, e.g. [1, 2] -> 0=1&1=2.
    """
    if isinstance(data, Mapping):
        pairs = data.items()
    elif _is_pairs(data):
        pairs = data
    else:
        pairs = enumerate(data)
    return urlencode(list(pairs), doseq=True)

def serializer_for(content_type: Optional[str]):
    """Pick a serializer for a declared content type.

    Returns None when the content type is declared but unrecognized, which
    means the caller opted out of serialization.
    """
    if content_type is None:
        return to_json
    if JSON_MARKER in content_type:
        return to_json
    if FORM_MARKER in content_type:
        return to_form
    return None

def parse_form(text: str) -> Dict[str, Union[str, List[str]]]:
    """Parse a URL-encoded form; repeated keys become lists."""
    parsed = parse_qs(text, keep_blank_values=True)
    return {k: v[0] if len(v) == 1 else v for k, v in parsed.items()}

def parse_body(raw: str, content_type: Optional[str]) -> Any:
    """Parse a response body by content type, falling back to the raw text."""
    parsed: Any = None
    if content_type:
        if JSON_MARKER in content_type:
            try:
                parsed = json.loads(raw)
            except ValueError:
                parsed = str(raw)
        elif FORM_TYPE in content_type:
            parsed = parse_form(raw)
    if parsed is None:
        parsed = raw
    return parsed
