from __future__ import annotations

"""
Quantum engine: builds a circuit, puts qubits in superposition,
measures them in alternating bases, and returns raw bitstrings.

Only used by QuantumRandomSource; the default generator path draws
from the operating system's CSPRNG instead.
"""
import logging

from qiskit import QuantumCircuit, transpile
from qiskit.exceptions import QiskitError
from qiskit_aer import AerSimulator

from .config import QuantumSourceConfig, DEFAULT_QUANTUM_CONFIG
from .entropy import RandomSourceError

logger = logging.getLogger(__name__)


class QuantumEngine:
    """
    Encapsulates all quantum-circuit-related logic.
    """

    def __init__(self, config: QuantumSourceConfig | None = None) -> None:
        self.config = config or DEFAULT_QUANTUM_CONFIG
        if self.config.num_qubits < 1:
            raise ValueError("num_qubits must be at least 1")

        # Local simulator backend.
        try:
            self.backend = AerSimulator()
        except QiskitError as exc:
            raise RandomSourceError(f"quantum backend unavailable: {exc}") from exc

        # Safety: ensure requested num_qubits does not exceed backend capability.
        backend_cfg = self.backend.configuration()
        max_qubits = getattr(backend_cfg, "num_qubits", None) or getattr(backend_cfg, "n_qubits", None)

        if max_qubits is not None and self.config.num_qubits > max_qubits:
            raise ValueError(
                f"Configured num_qubits={self.config.num_qubits} exceeds "
                f"backend limit ({max_qubits}). "
                "Lower num_qubits in QuantumSourceConfig."
            )

        self._circuit: QuantumCircuit | None = None

    def _build_circuit(self) -> QuantumCircuit:
        """
        Prepare N qubits, put them in superposition, then measure
        in alternating bases (Z, X, Z, X, …).
        """
        n = self.config.num_qubits
        qc = QuantumCircuit(n, n)

        for i in range(n):
            qc.h(i)

        # Odd indices get a second H so they are measured in the X basis.
        for i in range(n):
            if i % 2 == 1:
                qc.h(i)
            qc.measure(i, i)

        return qc

    def sample_bits(self, count: int) -> list[int]:
        """
        Return at least `count` raw bits, running as many shots as needed.
        """
        if count <= 0:
            return []

        n = self.config.num_qubits
        shots = (count + n - 1) // n

        try:
            if self._circuit is None:
                self._circuit = transpile(self._build_circuit(), self.backend)
            result = self.backend.run(self._circuit, shots=shots, memory=True).result()
            memory = result.get_memory()
        except QiskitError as exc:
            raise RandomSourceError(f"quantum sampling failed: {exc}") from exc

        logger.debug("Sampled %d shots of %d qubits", len(memory), n)

        bits: list[int] = []
        for bitstring in memory:
            # Qiskit orders bits as [q_(n-1) ... q_0]; reverse so index 0 is first qubit.
            bits.extend(int(b) for b in bitstring[::-1])

        return bits[:count]
