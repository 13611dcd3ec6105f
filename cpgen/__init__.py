"""
Constrained Password Generator package.
"""

from .config import (
    CharacterClass,
    GenerationRequest,
    QuantumSourceConfig,
    DEFAULT_REQUEST,
    DEFAULT_QUANTUM_CONFIG,
)
from .entropy import (
    RandomSourceError,
    ScriptedRandomSource,
    SystemRandomSource,
    QuantumRandomSource,
)
from .generator import (
    ConstrainedPasswordGenerator,
    ConstraintError,
    GenerationExhaustedError,
    GenerationMeta,
    generate_password,
    generate_password_with_meta,
)

__all__ = [
    "CharacterClass",
    "GenerationRequest",
    "QuantumSourceConfig",
    "DEFAULT_REQUEST",
    "DEFAULT_QUANTUM_CONFIG",
    "RandomSourceError",
    "ScriptedRandomSource",
    "SystemRandomSource",
    "QuantumRandomSource",
    "ConstrainedPasswordGenerator",
    "ConstraintError",
    "GenerationExhaustedError",
    "GenerationMeta",
    "generate_password",
    "generate_password_with_meta",
]
