"""
Constrained password generator package.
"""

from .config import (
    DEFAULT_SPECIAL_CHARS,
    DIGITS,
    LOWER_CASE,
    MAX_RETRIES,
    UPPER_CASE,
    ConfigError,
    DistinctExceedsLength,
    EmptyCharacterSet,
    MinimumsExceedLength,
    NegativeParameter,
    NullCharacterSet,
    PasswordConfig,
    build_configuration,
)
from .generator import (
    GenerationError,
    GenerationMeta,
    NoCharactersAvailable,
    generate,
    generate_password_with_meta,
)
from .random_source import JavaRandom, RandomSource

__all__ = [
    "DEFAULT_SPECIAL_CHARS",
    "DIGITS",
    "LOWER_CASE",
    "MAX_RETRIES",
    "UPPER_CASE",
    "ConfigError",
    "DistinctExceedsLength",
    "EmptyCharacterSet",
    "MinimumsExceedLength",
    "NegativeParameter",
    "NullCharacterSet",
    "PasswordConfig",
    "build_configuration",
    "GenerationError",
    "GenerationMeta",
    "NoCharactersAvailable",
    "generate",
    "generate_password_with_meta",
    "JavaRandom",
    "RandomSource",
]
