"""Line-oriented CSV handling for bulk imports.

Rows are split on commas positionally. Quoting and escaping are NOT
supported: a comma inside a field shifts every following column.
"""

from __future__ import annotations

import re

_LINE_BREAK = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    lines = (line.strip() for line in _LINE_BREAK.split(text or ""))
    return [line for line in lines if line]


def is_header(line: str) -> bool:
    lowered = line.lower()
    return "name" in lowered and "contact" in lowered and "residence" in lowered


def split_row(line: str) -> list[str]:
    return line.split(",")
