"""
Random byte sources for the password generator.

Every source hands out uniformly distributed bytes through `read(n)` and
is used as a scoped resource: acquire it, read from it, close it. The
generator opens a fresh source per call via a `with` block.

- SystemRandomSource: the operating system CSPRNG (default).
- QuantumRandomSource: quantum-sampled bits hashed with SHA-256 and
  XORed with the system CSPRNG.
- ScriptedRandomSource: replays fixed bytes, for tests and demos.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from typing import Callable, Iterable, Protocol

from .config import QuantumSourceConfig, DEFAULT_QUANTUM_CONFIG

logger = logging.getLogger(__name__)


class RandomSourceError(RuntimeError):
    """The random byte source failed or could not supply enough bytes."""


class RandomSource(Protocol):
    closed: bool

    def read(self, n: int) -> bytes: ...

    def close(self) -> None: ...

    def __enter__(self) -> "RandomSource": ...

    def __exit__(self, *exc_info: object) -> None: ...


RandomSourceFactory = Callable[[], RandomSource]


class BitEngine(Protocol):
    def sample_bits(self, count: int) -> list[int]: ...


class _BaseRandomSource:
    """
    Shared open/close bookkeeping and context manager support.
    """

    def __init__(self) -> None:
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self.closed = True

    def read(self, n: int) -> bytes:
        if self.closed:
            raise RandomSourceError(f"{type(self).__name__} is closed")
        if n < 0:
            raise ValueError("cannot read a negative number of bytes")
        if n == 0:
            return b""

        data = self._read(n)
        if len(data) != n:
            raise RandomSourceError(
                f"{type(self).__name__} returned {len(data)} bytes, expected {n}"
            )
        return data

    def _read(self, n: int) -> bytes:
        raise NotImplementedError


class SystemRandomSource(_BaseRandomSource):
    """Platform CSPRNG via `secrets.token_bytes`."""

    def _read(self, n: int) -> bytes:
        try:
            return secrets.token_bytes(n)
        except OSError as exc:
            raise RandomSourceError(f"system random source failed: {exc}") from exc


class ScriptedRandomSource(_BaseRandomSource):
    """
    Replay a fixed byte sequence.

    With `cycle=True` the sequence repeats forever; otherwise reading past
    the end raises RandomSourceError. Not suitable for real passwords.
    """

    def __init__(self, data: Iterable[int] | bytes, cycle: bool = False) -> None:
        super().__init__()
        self._data = bytes(data)
        self._cycle = cycle
        self._pos = 0
        self.bytes_read = 0

        if cycle and not self._data:
            raise ValueError("cannot cycle over an empty byte sequence")

    def _read(self, n: int) -> bytes:
        if self._cycle:
            out = bytearray()
            while len(out) < n:
                take = min(n - len(out), len(self._data) - self._pos)
                out += self._data[self._pos : self._pos + take]
                self._pos = (self._pos + take) % len(self._data)
            data = bytes(out)
        else:
            if self._pos + n > len(self._data):
                raise RandomSourceError(
                    f"scripted source exhausted after {self._pos} bytes"
                )
            data = self._data[self._pos : self._pos + n]
            self._pos += n

        self.bytes_read += len(data)
        return data


class QuantumRandomSource(_BaseRandomSource):
    """
    Bytes from the quantum engine, whitened with the system CSPRNG.

    For each 32-byte block:
    - sample `quantum_streams` independent streams of `block_bits` raw bits
    - XOR-combine them bit by bit and pack them into bytes
    - hash the result `entropy_rounds` times with SHA-256
    - XOR the digest with 32 bytes from `secrets.token_bytes`

    The simulator is a statistical PRNG, so the final XOR keeps every
    block at least as unpredictable as the operating system generator.
    """

    def __init__(
        self,
        config: QuantumSourceConfig | None = None,
        engine: BitEngine | None = None,
    ) -> None:
        super().__init__()
        self.config = config or DEFAULT_QUANTUM_CONFIG
        self._buffer = b""

        if self.config.block_bits < 256:
            raise ValueError("block_bits must be at least 256")

        if engine is None:
            # Imported here so qiskit is only loaded when this source is chosen.
            from .quantum_engine import QuantumEngine

            engine = QuantumEngine(self.config)

        self._engine = engine

    def close(self) -> None:
        self._buffer = b""
        super().close()

    def _sample_block_bits(self) -> int:
        """
        XOR of all streams, packed MSB first into one integer.
        """
        cfg = self.config
        combined = 0

        for _ in range(max(1, cfg.quantum_streams)):
            bits = self._engine.sample_bits(cfg.block_bits)

            if len(bits) != cfg.block_bits:
                raise RandomSourceError(
                    f"quantum engine returned {len(bits)} bits, expected {cfg.block_bits}"
                )

            stream = 0
            for bit in bits:
                stream = (stream << 1) | bit
            combined ^= stream

        return combined

    def _next_block(self) -> bytes:
        cfg = self.config
        data = self._sample_block_bits().to_bytes((cfg.block_bits + 7) // 8, "big")

        # At least one round so every block is a full 32-byte digest.
        for _ in range(max(1, cfg.entropy_rounds)):
            data = hashlib.sha256(data).digest()

        return bytes(a ^ b for a, b in zip(data, secrets.token_bytes(len(data))))

    def _read(self, n: int) -> bytes:
        while len(self._buffer) < n:
            self._buffer += self._next_block()

        data, self._buffer = self._buffer[:n], self._buffer[n:]
        return data


SOURCES: dict[str, RandomSourceFactory] = {
    "system": SystemRandomSource,
    "quantum": QuantumRandomSource,
}


def source_factory(name: str) -> RandomSourceFactory:
    """
    Look up a random source factory by its command-line name.
    """
    try:
        return SOURCES[name]
    except KeyError:
        raise ValueError(
            f"Unknown random source {name!r}; choose from {', '.join(sorted(SOURCES))}"
        ) from None
