"""
Pull a JSON object out of free-form model output.

Models wrap JSON in prose or markdown fences, so the scan looks for the first
`{` and walks to its balanced `}`, ignoring braces inside string literals.
"""

import json
import re
from typing import Any, Optional


_OPEN_BRACE = re.compile(r"\{")


def find_balanced_object(text: str, start: int = 0) -> Optional[str]:
    """Return the first balanced {...} span at or after `start`, or None."""
    match = _OPEN_BRACE.search(text, start)
    if not match:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(match.start(), len(text)):
        char = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[match.start():i + 1]
    return None


def extract_json_object(text: str) -> Optional[dict[str, Any]]:
    """
    Parse the first balanced JSON object in `text`.

    Returns None when there is no object or it does not parse.
    """
    if not text:
        return None

    candidate = find_balanced_object(text)
    if candidate is None:
        return None

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None
