"""
Seed entropy:
Samples raw quantum bits, mixes them with a cryptographic hash and folds
the result into an integer seed for the password random source.
"""

from __future__ import annotations

import hashlib
import logging

from .quantum_engine import QuantumEngine

logger = logging.getLogger(__name__)

# Qubits measured per stream. Keep this <= backend limit.
SEED_QUBITS = 24
# Independent circuit runs joined into one bitstream.
SEED_STREAMS = 2
# SHA-256 rounds applied to the combined stream.
SEED_ROUNDS = 2
# Width of the produced seed; JavaRandom only uses the low 48 bits.
SEED_BITS = 64


def bits_to_bytes(bits: list[int]) -> bytes:
    """
    Pack a list of bits [0,1,1,0,...] into bytes (8 bits per byte).
    If bits length is not a multiple of 8, pad with zeros at the end.
    """
    if not bits:
        return b""

    pad_len = (8 - (len(bits) % 8)) % 8
    bits_padded = bits + [0] * pad_len

    byte_values = []
    for i in range(0, len(bits_padded), 8):
        byte = 0
        for bit in bits_padded[i : i + 8]:
            byte = (byte << 1) | bit
        byte_values.append(byte)

    return bytes(byte_values)


def amplify_entropy(bits: list[int], rounds: int = 1) -> bytes:
    """
    Hash the packed bitstream with SHA-256 `rounds` times.

    With rounds <= 0 the packed bits are returned unmixed.
    """
    data = bits_to_bytes(bits)
    for _ in range(rounds):
        data = hashlib.sha256(data).digest()
    return data


def combine_streams(streams: list[list[int]]) -> list[int]:
    """
    Join equally long bitstreams end to end, so two 24-qubit runs give
    the 48 raw bits a JavaRandom state holds.
    """
    if not streams:
        return []

    width = len(streams[0])
    combined: list[int] = []
    for bits in streams:
        if len(bits) != width:
            raise ValueError(
                "Quantum streams produced different bit-lengths; "
                "this should not happen."
            )
        combined.extend(bits)
    return combined


def seed_from_bytes(data: bytes, width: int = SEED_BITS) -> int:
    """
    Take the leading `width` bits of `data` as a big-endian integer.
    """
    nbytes = (width + 7) // 8
    value = int.from_bytes(data[:nbytes], "big")
    excess = nbytes * 8 - width
    return value >> excess if excess > 0 else value


def quantum_seed(
    num_qubits: int = SEED_QUBITS,
    streams: int = SEED_STREAMS,
    rounds: int = SEED_ROUNDS,
) -> int:
    """
    Produce a fresh seed for an unseeded configuration.

    - Sample `streams` independent quantum bitstreams.
    - Join them end to end.
    - Mix with SHA-256.
    - Fold the digest into a SEED_BITS-wide integer.
    """
    engine = QuantumEngine(num_qubits=num_qubits)
    sampled = [engine.get_raw_bits() for _ in range(max(1, streams))]

    mixed = amplify_entropy(combine_streams(sampled), rounds)
    seed = seed_from_bytes(mixed)
    logger.debug(
        "Derived seed from %d quantum stream(s) of %d qubits",
        len(sampled),
        num_qubits,
    )
    return seed
