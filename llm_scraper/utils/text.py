from __future__ import annotations

import re


_FENCE = re.compile(r"^\s*```[a-zA-Z0-9_-]*[ \t]*\n?([\s\S]*?)\n?\s*```\s*$")


def strip_code_fence(text: str) -> str:
    """Return the body of a markdown code fence wrapping the whole text, trimmed.

    Text that is not fenced is only trimmed.
    """
    m = _FENCE.match(text)
    if m:
        return m.group(1).strip()
    return text.strip()


def repair_json_prefix(text: str, prefix: str = "{") -> str:
    """
    Undo the side effect of seeding the assistant turn with `prefix`.

    The model continues after the seed, so its reply usually lacks the opening
    brace. Sometimes it wraps the continuation (or a full object) in a code
    fence instead. Strip the fence, then put the prefix back unless the text
    already starts with it. The result is not validated as JSON.
    """
    cleaned = strip_code_fence(text)
    if not cleaned.startswith(prefix):
        cleaned = prefix + cleaned
    return cleaned
