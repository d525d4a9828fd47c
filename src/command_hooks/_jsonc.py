"""JSON-with-comments support for command-hooks.jsonc."""

from __future__ import annotations

import json
from typing import Any


def strip_jsonc_comments(text: str) -> str:
    """Remove `//` and `/* */` comments that sit outside string literals.

    The newline ending a line comment and every newline inside a block comment
    are kept, so line numbers in later JSON errors still point at the source.
    """
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False
    escaped = False

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            end = text.find("\n", i)
            if end == -1:
                break
            i = end  # the newline itself is emitted on the next iteration
            continue
        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            body = text[i + 2 :] if end == -1 else text[i + 2 : end]
            out.append("\n" * body.count("\n"))
            if end == -1:
                break
            i = end + 2
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def loads_jsonc(text: str) -> Any:
    """Parse JSONC text. Raises json.JSONDecodeError on malformed input."""
    return json.loads(strip_jsonc_comments(text))
