"""
Mapping logic: turn a set of enabled character categories into the pool
of characters a single password position may draw from.
"""

from __future__ import annotations

from typing import AbstractSet

from .config import DIGITS, LOWER_CASE, UPPER_CASE, PasswordConfig


def category_alphabets(
    config: PasswordConfig,
    upper: bool = False,
    lower: bool = False,
    digits: bool = False,
    special: bool = False,
) -> list[str]:
    """
    Alphabets of the enabled categories, always in the order
    upper, lower, digits, special.
    """
    alphabets: list[str] = []
    if upper:
        alphabets.append(UPPER_CASE)
    if lower:
        alphabets.append(LOWER_CASE)
    if digits:
        alphabets.append(DIGITS)
    if special:
        alphabets.append(config.special_chars)
    return alphabets


def admissible_pool(
    alphabets: list[str],
    used: AbstractSet[str] | None = None,
) -> str:
    """
    Concatenate `alphabets`, dropping every character in `used` when given.

    Duplicates inside an alphabet are kept, so a special character listed
    twice is twice as likely to be drawn.
    """
    if used is None:
        return "".join(alphabets)
    return "".join(ch for alphabet in alphabets for ch in alphabet if ch not in used)


def full_alphabet(config: PasswordConfig) -> str:
    """
    Every character an unrestricted position can produce.
    """
    return admissible_pool(category_alphabets(config, True, True, True, True))
