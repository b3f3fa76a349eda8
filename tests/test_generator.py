"""Tests for password synthesis and the exclusion retry loop."""
from __future__ import annotations

import logging
import string
import threading

import pytest

from cpgen import (
    MAX_RETRIES,
    JavaRandom,
    NoCharactersAvailable,
    build_configuration,
    generate,
    generate_password_with_meta,
)
from cpgen import generator
from cpgen.generator import (
    RETRY_EXHAUSTED_MESSAGE,
    find_excluded_word,
    shuffle_in_place,
    synthesize_candidate,
)

SPECIALS = set(string.punctuation)


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        (dict(length=8, min_upper=8, seed=34355), "ONXWDMKW"),
        (dict(length=14, min_upper=14, seed=3045328053285032), "SDPOZBZJQQNFXV"),
        (dict(length=10, min_lower=10, seed=435694376), "nonyjnwhgh"),
        (dict(length=20, min_alphabetic=20, seed=650004), "SHszrVLueytaGVeaxIRY"),
        (dict(length=15, min_digits=15, seed=6868342575678436457), "412566696995779"),
        (dict(length=9, min_special=9, seed=8623202), "')>.!(@\\%"),
        (
            dict(length=12, min_upper=1, min_lower=1, min_digits=1, seed=43252),
            "<d%\\~8gcYPR*",
        ),
        (
            dict(
                length=10,
                min_upper=1,
                min_lower=1,
                min_digits=1,
                min_special=1,
                min_alphabetic=4,
                seed=6,
            ),
            "Vp'R4g6JLS",
        ),
        (dict(length=10, min_digits=10, min_distinct=10, seed=660232762), "0214359678"),
        (dict(length=20, min_distinct=10, seed=97557893), "\"J=|E:m'z1+<CdAI!~/o"),
        (dict(length=20, min_distinct=20, seed=97557894), "K4Z>f,obuTndA)&:IM8J"),
    ],
)
def test_seeded_output_is_reproduced(options, expected) -> None:
    assert generate(build_configuration(**options)) == expected


def test_unconstrained_seeded_output() -> None:
    first = build_configuration(length=100, seed=32957235923)
    assert generate(first) == (
        "CaKt{W@dGq2XFFH5=6T.q}(W1g9B2D#WX:^nS3t\\W7OVMkJrCz{ssEC{{jGw7~j2kA"
        "{7(X}<*IZ;d*e$RY~[:[T-|7}X>]KZ9a{N"
    )
    second = build_configuration(length=100, seed=235442)
    assert generate(second) == (
        "U3S\\JMH~O1_*R:5YbHSWY|`^ZD{q%fI*#Nv%<=j7u|MEe6S$Xag<?|;n0^\"Rd[-HH4"
        "LiE+0E$<CO_2~ha&P-4ODf/vmFs84ete'^"
    )


def test_same_seed_gives_same_sequence_across_configs() -> None:
    options = dict(length=16, min_upper=2, min_digits=3, min_distinct=8, seed=99)
    a = build_configuration(**options)
    b = build_configuration(**options)

    assert [generate(a) for _ in range(5)] == [generate(b) for _ in range(5)]


def test_repeated_calls_advance_the_source() -> None:
    config = build_configuration(length=12, seed=1234)
    passwords = {generate(config) for _ in range(10)}
    assert len(passwords) > 1


def test_distinct_digits_appear_once_each() -> None:
    password = generate(
        build_configuration(length=10, min_digits=10, min_distinct=10, seed=660232762)
    )
    assert sorted(password) == list(string.digits)


@pytest.mark.parametrize("seed", range(25))
def test_minimums_are_met(seed: int) -> None:
    config = build_configuration(
        length=16,
        min_upper=2,
        min_lower=3,
        min_digits=4,
        min_special=2,
        min_alphabetic=7,
        seed=seed,
    )
    password = generate(config)

    assert len(password) == 16
    assert sum(ch.isupper() for ch in password) >= 2
    assert sum(ch.islower() for ch in password) >= 3
    assert sum(ch.isdigit() for ch in password) >= 4
    assert sum(ch in SPECIALS for ch in password) >= 2
    assert sum(ch.isalpha() for ch in password) >= 7


@pytest.mark.parametrize("seed", range(25))
def test_full_distinct_gives_unique_characters(seed: int) -> None:
    config = build_configuration(length=30, min_distinct=30, min_upper=5, seed=seed)
    password = generate(config)

    assert len(password) == 30
    assert len(set(password)) == 30


def test_custom_special_characters_only() -> None:
    config = build_configuration(length=12, min_special=12, special_chars="!@#", seed=5)
    password = generate(config)

    assert len(password) == 12
    assert set(password) <= set("!@#")


def test_zero_length_password() -> None:
    config = build_configuration(length=0, seed=1, exclude_words=["a"])
    meta = generate_password_with_meta(config)

    assert meta.password == ""
    assert meta.attempts == 1
    assert meta.exclusions_satisfied


def test_running_out_of_distinct_digits_raises() -> None:
    config = build_configuration(length=12, min_digits=12, min_distinct=12, seed=1)
    with pytest.raises(NoCharactersAvailable):
        generate(config)


def test_running_out_of_distinct_specials_raises() -> None:
    config = build_configuration(
        length=4, min_special=4, min_distinct=4, special_chars="!?", seed=1
    )
    with pytest.raises(NoCharactersAvailable):
        generate(config)


def test_excluded_words_are_skipped() -> None:
    excluded = ["=?/UL$B(", "zovNpWJu", "+/(eZ=4~", "Q/$+TY@m", "uJ2*.S)j"]
    config = build_configuration(length=8, seed=454359, exclude_words=excluded)

    meta = generate_password_with_meta(config)

    assert meta.password not in excluded
    assert meta.password == "F$R9^|>b"
    # The first five candidates for this seed are exactly the excluded words.
    assert meta.attempts == 6
    assert meta.exclusions_satisfied


def test_without_exclusions_first_candidate_wins() -> None:
    config = build_configuration(length=8, seed=454359)
    assert generate(config) == "=?/UL$B("


def test_retry_exhaustion_logs_warning_and_returns_last(caplog) -> None:
    config = build_configuration(
        length=10, min_digits=10, exclude_words=list(string.digits), seed=77
    )

    with caplog.at_level(logging.WARNING, logger="cpgen.generator"):
        meta = generate_password_with_meta(config)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "exclude_words is too restrictive" in warnings[0].getMessage()
    assert meta.attempts == MAX_RETRIES
    assert not meta.exclusions_satisfied
    assert len(meta.password) == 10
    assert meta.password.isdigit()


def test_acceptance_on_last_attempt_is_silent(monkeypatch, caplog) -> None:
    calls = {"n": 0}

    def fake_synthesize(config, rng) -> str:
        calls["n"] += 1
        return "ok" if calls["n"] == MAX_RETRIES else "bad"

    monkeypatch.setattr(generator, "synthesize_candidate", fake_synthesize)
    config = build_configuration(length=3, exclude_words=["bad"], seed=1)

    with caplog.at_level(logging.WARNING, logger="cpgen.generator"):
        meta = generate_password_with_meta(config)

    assert calls["n"] == MAX_RETRIES
    assert meta.attempts == MAX_RETRIES
    assert meta.password == "ok"
    assert meta.exclusions_satisfied
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_retry_exhaustion_uses_injected_sink() -> None:
    messages: list[str] = []
    config = build_configuration(
        length=10, min_digits=10, exclude_words=list(string.digits), seed=3
    )

    password = generate(config, warn=messages.append)

    assert messages == [RETRY_EXHAUSTED_MESSAGE]
    assert len(password) == 10


def test_explicit_random_source_overrides_config() -> None:
    config = build_configuration(length=8, min_upper=8, seed=1)
    assert generate(config, rng=JavaRandom(34355)) == "ONXWDMKW"


def test_find_excluded_word() -> None:
    assert find_excluded_word("abc123", ["zz", "c12", "abc"]) == "c12"
    assert find_excluded_word("abc123", ["zz", ""]) is None
    assert find_excluded_word("abc123", []) is None


def test_shuffle_keeps_characters() -> None:
    chars = list("abcdefgh")
    shuffle_in_place(chars, JavaRandom(7))
    assert sorted(chars) == list("abcdefgh")


def test_synthesize_candidate_respects_length() -> None:
    config = build_configuration(length=25, min_alphabetic=25, seed=11)
    candidate = synthesize_candidate(config, JavaRandom(11))
    assert len(candidate) == 25
    assert candidate.isalpha()


def test_entropy_estimate() -> None:
    config = build_configuration(length=10, special_chars="!@", seed=1)
    meta = generate_password_with_meta(config)
    # 26 + 26 + 10 + 2 = 64 symbols -> 6 bits each
    assert meta.entropy_bits == pytest.approx(60.0)


def test_shared_config_across_threads() -> None:
    config = build_configuration(
        length=60,
        min_upper=10,
        min_alphabetic=30,
        min_digits=5,
        min_distinct=10,
        exclude_words=["dfldjf", "343"],
        seed=2024,
    )
    results: list[str] = []
    errors: list[BaseException] = []
    lock = threading.Lock()

    def worker() -> None:
        try:
            for _ in range(50):
                password = generate(config)
                with lock:
                    results.append(password)
        except BaseException as exc:  # surfaced below
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(results) == 400
    assert all(len(p) == 60 for p in results)
