"""
High-level generator: single-candidate synthesis, shuffle, and the
exclusion-word retry loop.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Iterable

from .config import MAX_RETRIES, PasswordConfig
from .mapping import admissible_pool, category_alphabets, full_alphabet
from .random_source import RandomSource

logger = logging.getLogger(__name__)

RETRY_EXHAUSTED_MESSAGE = (
    "Failed to generate a password because exclude_words is too restrictive; "
    "returning the last candidate despite the match."
)


class GenerationError(RuntimeError):
    """A password could not be synthesized from the configuration."""


class NoCharactersAvailable(GenerationError):
    """Every admissible character for a position was already used."""


@dataclass
class GenerationMeta:
    """
    Full result of one password generation.
    """

    # Final password
    password: str

    # Candidates synthesized, including the returned one
    attempts: int

    # False only when the retry budget ran out and the last candidate
    # still contains an excluded word.
    exclusions_satisfied: bool

    # Naive strength estimate: length * log2(unrestricted alphabet size)
    entropy_bits: float

    config: PasswordConfig


def shuffle_in_place(chars: list[str], rng: RandomSource) -> None:
    """
    Fisher-Yates, walking from the last index down to 1.
    """
    for index in range(len(chars) - 1, 0, -1):
        swap = rng.next_int(index + 1)
        chars[swap], chars[index] = chars[index], chars[swap]


def synthesize_candidate(config: PasswordConfig, rng: RandomSource) -> str:
    """
    Build one password of config.length characters.

    Positions are filled in category priority order:
    upper -> lower -> digits -> special -> alphabetic (upper+lower) -> anything.
    Each category is used until its counter reaches zero, so every minimum
    is met by the leading positions. The result is then shuffled.
    """
    upper = config.min_upper
    lower = config.min_lower
    digits = config.min_digits
    special = config.min_special
    alphabetic = config.min_alphabetic
    distinct = config.min_distinct

    used: set[str] = set()
    chars: list[str] = []

    for _ in range(config.length):
        # Until the distinct minimum is met, never reuse a character.
        if distinct > 0:
            exclude_used = True
            distinct -= 1
        else:
            exclude_used = False

        if upper > 0:
            alphabets = category_alphabets(config, upper=True)
            upper -= 1
            alphabetic -= 1
        elif lower > 0:
            alphabets = category_alphabets(config, lower=True)
            lower -= 1
            alphabetic -= 1
        elif digits > 0:
            alphabets = category_alphabets(config, digits=True)
            digits -= 1
        elif special > 0:
            alphabets = category_alphabets(config, special=True)
            special -= 1
        elif alphabetic > 0:
            alphabets = category_alphabets(config, upper=True, lower=True)
            alphabetic -= 1
        else:
            alphabets = category_alphabets(
                config, upper=True, lower=True, digits=True, special=True
            )

        pool = admissible_pool(alphabets, used if exclude_used else None)
        if not pool:
            raise NoCharactersAvailable(
                "No characters left to pick from. "
                "Make sure min_distinct is not set too high."
            )

        picked = pool[rng.next_int(len(pool))]
        used.add(picked)
        chars.append(picked)

    shuffle_in_place(chars, rng)
    return "".join(chars)


def find_excluded_word(candidate: str, exclude_words: Iterable[str]) -> str | None:
    """
    Return the first exclusion word found inside `candidate`, or None
    if the candidate is acceptable.
    """
    for word in exclude_words:
        if word and word in candidate:
            return word
    return None


def generate_password_with_meta(
    config: PasswordConfig,
    rng: RandomSource | None = None,
    warn: Callable[[str], None] | None = None,
) -> GenerationMeta:
    """
    Generate one password and report how it was obtained.

    - Synthesize a candidate.
    - Reject it if it contains any exclusion word, up to MAX_RETRIES times.
    - If every attempt was rejected, report through `warn` and return the
      last candidate anyway.

    NoCharactersAvailable from synthesis propagates unchanged.
    """
    source = rng if rng is not None else config.random
    sink = warn if warn is not None else logger.warning

    candidate = ""
    satisfied = False
    attempts = 0
    while attempts < MAX_RETRIES:
        attempts += 1
        candidate = synthesize_candidate(config, source)
        matched = find_excluded_word(candidate, config.exclude_words)
        if matched is None:
            satisfied = True
            break
        logger.debug("Attempt %d rejected: contains %r", attempts, matched)

    if not satisfied:
        sink(RETRY_EXHAUSTED_MESSAGE)

    alphabet_size = len(full_alphabet(config))
    entropy_bits = config.length * math.log2(alphabet_size) if alphabet_size else 0.0

    return GenerationMeta(
        password=candidate,
        attempts=attempts,
        exclusions_satisfied=satisfied,
        entropy_bits=entropy_bits,
        config=config,
    )


def generate(
    config: PasswordConfig,
    rng: RandomSource | None = None,
    warn: Callable[[str], None] | None = None,
) -> str:
    """
    Generate one password satisfying `config`.
    """
    return generate_password_with_meta(config, rng=rng, warn=warn).password
