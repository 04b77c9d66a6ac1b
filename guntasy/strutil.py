"""Small integer and string helpers used across the game."""

from __future__ import annotations

from itertools import zip_longest
from typing import Optional

INT_MAX = 2147483647


def get_int_len(num: int) -> int:
    """Number of decimal digits in num; zero has none."""
    num = abs(num)
    length = 0
    while num:
        num //= 10
        length += 1
    return length


def int_to_str(num: int) -> str:
    """Decimal digits of a non-negative integer; zero gives an empty string."""
    if num < 0:
        raise ValueError(f"cannot convert negative number {num}")
    if num == 0:
        return ""
    return str(num)


def to_num(text: str) -> int:
    """Read the leading digits of text as an int.

    Reading stops at the first non-digit; a '-' there negates what was read
    so far. Values above INT_MAX give 0.
    """
    value = 0
    for ch in text:
        if not "0" <= ch <= "9":
            return -value if ch == "-" else value
        value = value * 10 + (ord(ch) - ord("0"))
        if value > INT_MAX:
            return 0
    return value


def str_compare(str1: str, str2: str) -> int:
    """Difference of the first differing characters, 0 when equal."""
    for a, b in zip_longest(str1, str2, fillvalue="\0"):
        if a != b:
            return ord(a) - ord(b)
    return 0


def str_equal(str1: str, str2: str) -> bool:
    return str_compare(str1, str2) == 0


def str_last(text: str, ch: str) -> Optional[int]:
    """Index of the last occurrence of ch in text, or None."""
    if len(ch) != 1:
        raise ValueError("expected a single character")
    if ch == "\0":
        return None
    index = text.rfind(ch)
    return None if index < 0 else index