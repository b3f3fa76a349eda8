"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them, and returns raw bitstrings.

Only used to seed the password random source when the caller gives
no seed of their own.
"""

from __future__ import annotations

from qiskit import QuantumCircuit, transpile
from qiskit_aer import AerSimulator


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, num_qubits: int = 24) -> None:
        if num_qubits <= 0:
            raise ValueError(f"num_qubits must be positive, got {num_qubits}")
        self.num_qubits = num_qubits
        # Local simulator backend.
        self.backend = AerSimulator()

        max_qubits = getattr(self.backend, "num_qubits", None)
        if max_qubits is not None and num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={num_qubits} exceeds "
                f"backend limit ({max_qubits})."
            )

    def _build_circuit(self) -> QuantumCircuit:
        """
        Put each of N qubits into equal superposition with one H gate and
        measure it, so every classical bit is a fair coin.
        """
        n = self.num_qubits
        qc = QuantumCircuit(n, n)
        for i in range(n):
            qc.h(i)
            qc.measure(i, i)
        return qc

    def get_raw_bits(self) -> list[int]:
        """
        Run the circuit once and return its bits, qubit 0 first.
        """
        tqc = transpile(self._build_circuit(), self.backend)

        # Single shot: one random outcome.
        counts = self.backend.run(tqc, shots=1).result().get_counts()
        bitstring = next(iter(counts.keys()))

        # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
        return [int(b) for b in bitstring[::-1]]
