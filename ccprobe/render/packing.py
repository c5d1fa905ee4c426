#!/usr/bin/env python3
"""
Greedy packing of words into width-bounded make assignments.
"""

from typing import Sequence


DEFAULT_WIDTH = 80


def pack_assignment(
    variable: str,
    words: Sequence[str],
    width: int = DEFAULT_WIDTH,
    assign: str = "=",
    append: str = "+=",
) -> list[str]:
    """
    Pack ``words`` into ``variable`` assignments no wider than ``width``.

    The first line uses ``assign``, every following line ``append``. A word
    starts a new line when adding it would make the current line reach or
    exceed ``width`` characters. A single word longer than that still gets a
    line of its own. Without any words there is nothing to assign and the
    result is empty.

    Example (width 40, ten-character words):
        ["NAME = aaaaaaaaaa bbbbbbbbbb cccccccccc",
         "NAME += dddddddddd eeeeeeeeee"]
    """
    if not words:
        return []
    lines: list[str] = []
    current = f"{variable} {assign}"
    filled = False
    for word in words:
        candidate = f"{current} {word}"
        if filled and len(candidate) >= width:
            lines.append(current)
            current = f"{variable} {append} {word}"
        else:
            current = candidate
        filled = True
    lines.append(current)
    return lines
