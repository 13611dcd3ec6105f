"""
Configuration for the Constrained Password Generator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

MIN_PASSWORD_LENGTH = 8
MIN_RETRIES = 1
MAX_RETRIES = 1000

UPPER_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWER_CHARS = "abcdefghijklmnopqrstuvwxyz"
NUMERIC_CHARS = "0123456789"
SPECIAL_CHARS = "@.+-=*!#$%&?"


@dataclass(frozen=True)
class CharacterClass:
    """
    A named, disjoint set of characters plus how many of them a
    password must contain. A minimum of 0 disables the class.
    """

    name: str
    characters: str
    minimum: int = 0

    @property
    def enabled(self) -> bool:
        return self.minimum > 0

    def with_minimum(self, minimum: int) -> "CharacterClass":
        return replace(self, minimum=minimum)


UPPER = CharacterClass("upper", UPPER_CHARS)
LOWER = CharacterClass("lower", LOWER_CHARS)
NUMERIC = CharacterClass("numeric", NUMERIC_CHARS)
SPECIAL = CharacterClass("special", SPECIAL_CHARS)

# Order matters: the combined alphabet is built in this order.
CHARACTER_CLASSES: tuple[CharacterClass, ...] = (UPPER, LOWER, NUMERIC, SPECIAL)


@dataclass(frozen=True)
class GenerationRequest:
    # Total password length in characters.
    length: int = 16

    # Minimum number of characters required from each class.
    upper_min: int = 2
    lower_min: int = 2
    numeric_min: int = 2
    special_min: int = 2

    # Upper bound on generate-then-check attempts.
    max_retries: int = 100

    def classes(self) -> tuple[CharacterClass, ...]:
        """
        The four character classes carrying this request's minimums.
        """
        return (
            UPPER.with_minimum(self.upper_min),
            LOWER.with_minimum(self.lower_min),
            NUMERIC.with_minimum(self.numeric_min),
            SPECIAL.with_minimum(self.special_min),
        )

    def enabled_classes(self) -> tuple[CharacterClass, ...]:
        return tuple(c for c in self.classes() if c.enabled)

    @property
    def required_total(self) -> int:
        return self.upper_min + self.lower_min + self.numeric_min + self.special_min


@dataclass
class QuantumSourceConfig:
    # Number of qubits to prepare in superposition.
    # Each qubit gives one raw bit per shot.
    # NOTE: Keep this <= backend limit (often 20–29 for local simulators).
    num_qubits: int = 20

    # Rounds of SHA-256 mixing applied to every block of raw bits.
    entropy_rounds: int = 2

    # Independent quantum streams XOR-combined per block.
    quantum_streams: int = 2

    # Raw bits gathered per stream before amplification into one digest.
    block_bits: int = 256


# Default instances you can import elsewhere
DEFAULT_REQUEST = GenerationRequest()
DEFAULT_QUANTUM_CONFIG = QuantumSourceConfig()
