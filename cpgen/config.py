"""
Configuration for the constrained password generator.

A PasswordConfig is validated once, when it is created, and is then
shared read-only by any number of generate() calls. The only state that
changes afterwards is the cursor of its random source.
"""

from __future__ import annotations

import logging
import string
from collections.abc import Sequence
from dataclasses import InitVar, dataclass, field
from typing import Callable, Iterable

from .random_source import JavaRandom

logger = logging.getLogger(__name__)

UPPER_CASE = string.ascii_uppercase
LOWER_CASE = string.ascii_lowercase
DIGITS = string.digits
# !"#$%&'()*+,-./:;<=>?@[\]^_`{|}~
DEFAULT_SPECIAL_CHARS = string.punctuation

# Attempts made to avoid the exclusion words before giving up.
MAX_RETRIES = 1000


class ConfigError(ValueError):
    """Invalid password configuration."""


class NullCharacterSet(ConfigError):
    """special_chars was None."""


class EmptyCharacterSet(ConfigError):
    """special_chars was empty."""


class MinimumsExceedLength(ConfigError):
    """The category minimums add up to more than the length."""


class DistinctExceedsLength(ConfigError):
    """min_distinct is larger than the length."""


class NegativeParameter(ConfigError):
    """A length or minimum was negative."""


@dataclass(frozen=True)
class PasswordConfig:
    # Desired password length in characters.
    length: int = 8

    # Per-category minimums. min_alphabetic is satisfied by upper or lower
    # case characters alike, including those placed for min_upper/min_lower.
    min_upper: int = 0
    min_lower: int = 0
    min_alphabetic: int = 0
    min_digits: int = 0
    min_special: int = 0

    # The first min_distinct characters placed must all differ.
    min_distinct: int = 0

    special_chars: str | None = DEFAULT_SPECIAL_CHARS

    # Substrings a password must not contain. Stored deduplicated, in
    # first-seen order, without None or empty entries.
    exclude_words: tuple[str, ...] = ()

    # None means "seed from fresh entropy".
    seed: int | None = None

    random: JavaRandom | None = field(
        default=None, compare=False, repr=False
    )

    # Called for a seed only when seed is None and no random source is given.
    seed_source: InitVar[Callable[[], int] | None] = None

    def __post_init__(self, seed_source: Callable[[], int] | None) -> None:
        special = self.special_chars
        if special is not None and not isinstance(special, str):
            # Sets join in hash order, which would change seeded output.
            if not isinstance(special, Sequence):
                raise ConfigError(
                    "special_chars must be a str or an ordered sequence of "
                    f"characters, not {type(special).__name__}."
                )
            special = "".join(special)
        object.__setattr__(self, "special_chars", special)
        object.__setattr__(
            self, "exclude_words", _normalize_words(self.exclude_words)
        )

        self.validate()

        if self.random is None:
            if self.seed is not None:
                value = self.seed
            else:
                if seed_source is None:
                    from .entropy import quantum_seed

                    seed_source = quantum_seed
                value = seed_source()
            object.__setattr__(self, "random", JavaRandom(value))

    def validate(self) -> None:
        """
        Raise a ConfigError subclass if the parameters cannot describe a
        password.
        """
        if self.special_chars is None:
            raise NullCharacterSet("special_chars cannot be None.")
        if len(self.special_chars) < 1:
            raise EmptyCharacterSet("special_chars must contain at least 1 character.")

        counts = {
            "length": self.length,
            "min_upper": self.min_upper,
            "min_lower": self.min_lower,
            "min_alphabetic": self.min_alphabetic,
            "min_digits": self.min_digits,
            "min_special": self.min_special,
            "min_distinct": self.min_distinct,
        }
        negative = [name for name, value in counts.items() if value < 0]
        if negative:
            raise NegativeParameter(
                f"{', '.join(negative)} must not be negative."
            )

        minimums = self.min_upper + self.min_lower + self.min_digits + self.min_special
        if minimums > self.length:
            raise MinimumsExceedLength(
                "The sum of all minimums must be less than or equal to "
                f"the length, {self.length} (got {minimums})."
            )

        if self.min_distinct > self.length:
            raise DistinctExceedsLength(
                "The minimum distinct characters must be less than or equal "
                f"to the length, {self.length} (got {self.min_distinct})."
            )


def _normalize_words(words: Iterable[str | None] | None) -> tuple[str, ...]:
    if not words:
        return ()
    if isinstance(words, str):
        words = [words]
    return tuple(dict.fromkeys(w for w in words if w))


def build_configuration(
    length: int = 8,
    min_upper: int = 0,
    min_lower: int = 0,
    min_alphabetic: int = 0,
    min_digits: int = 0,
    min_special: int = 0,
    min_distinct: int = 0,
    special_chars: str | None = DEFAULT_SPECIAL_CHARS,
    exclude_words: Iterable[str | None] | None = None,
    seed: int | None = None,
    seed_source: Callable[[], int] | None = None,
) -> PasswordConfig:
    """
    Validate the options and return an immutable PasswordConfig.

    Raises a ConfigError subclass on invalid input; nothing is returned
    in that case. When `seed` is None the random source is seeded from
    `seed_source()`, which defaults to a quantum-derived seed.
    """
    config = PasswordConfig(
        length=length,
        min_upper=min_upper,
        min_lower=min_lower,
        min_alphabetic=min_alphabetic,
        min_digits=min_digits,
        min_special=min_special,
        min_distinct=min_distinct,
        special_chars=special_chars,
        exclude_words=_normalize_words(exclude_words),
        seed=seed,
        seed_source=seed_source,
    )
    logger.debug(
        "Built password configuration: length=%d seeded=%s exclude_words=%d",
        config.length,
        config.seed is not None,
        len(config.exclude_words),
    )
    return config
