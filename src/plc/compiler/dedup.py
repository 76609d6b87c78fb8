"""Line-level deduplication."""

from __future__ import annotations


def dedup_lines(text: str) -> str:
    """Drop repeated lines, comparing stripped lowercase content.

    Blank lines always pass through and kept lines stay in their original
    order, so applying this twice gives the same result as once.
    """

    seen: set[str] = set()
    output: list[str] = []
    for line in text.split("\n"):
        key = line.strip().lower()
        if not key:
            output.append(line)
            continue
        if key in seen:
            continue
        seen.add(key)
        output.append(line)
    return "\n".join(output)
