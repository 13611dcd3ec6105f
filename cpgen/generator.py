"""
Constrained password generation.

Passwords are drawn uniformly from the combined alphabet of every
enabled character class, then checked against the per-class minimums.
Candidates that fall short are thrown away and a new one is drawn, up to
`max_retries` times.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .config import (
    CHARACTER_CLASSES,
    DEFAULT_REQUEST,
    MAX_RETRIES,
    MIN_PASSWORD_LENGTH,
    MIN_RETRIES,
    GenerationRequest,
)
from .entropy import RandomSourceFactory, SystemRandomSource
from .mapping import (
    build_alphabet,
    build_class_lookup,
    bytes_to_password,
    count_classes,
    satisfies_minimums,
)

logger = logging.getLogger(__name__)


class ConstraintError(ValueError):
    """The request is invalid or its minimums cannot be satisfied."""


class GenerationExhaustedError(RuntimeError):
    """No candidate met the minimums within the retry budget."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


@dataclass
class GenerationMeta:
    """
    Full result of one password generation.
    """

    # Final password
    password: str

    # 1-based number of the attempt that was accepted
    attempts: int

    # Sampling domain and per-class counts in the accepted password
    alphabet: str
    class_counts: dict[str, int]

    # Theoretical strength estimate: length * log2(alphabet size)
    entropy_bits: float
    request: GenerationRequest


def validate_request(request: GenerationRequest) -> None:
    """
    Raise ConstraintError when the request cannot be served.
    Runs before any random bytes are consumed.
    """
    if request.length < MIN_PASSWORD_LENGTH:
        raise ConstraintError(
            f"password length must be at least {MIN_PASSWORD_LENGTH}, got {request.length}"
        )

    for cls in request.classes():
        if cls.minimum < 0:
            raise ConstraintError(f"{cls.name} minimum must not be negative")

    if not MIN_RETRIES <= request.max_retries <= MAX_RETRIES:
        raise ConstraintError(
            f"max_retries must be between {MIN_RETRIES} and {MAX_RETRIES}, "
            f"got {request.max_retries}"
        )

    if request.required_total > request.length:
        raise ConstraintError(
            "sum of character-class minimums exceeds password length "
            f"({request.required_total} > {request.length})"
        )

    if not request.enabled_classes():
        raise ConstraintError("at least one character class must be required")


class ConstrainedPasswordGenerator:
    """
    Rejection-sampling password generator.

    `random_source` is a zero-argument factory; a fresh source is opened
    for every call and closed before the call returns.
    """

    def __init__(self, random_source: RandomSourceFactory | None = None) -> None:
        self.random_source = random_source or SystemRandomSource

    def generate(self, request: GenerationRequest | None = None) -> str:
        return self.generate_with_meta(request).password

    def generate_with_meta(
        self,
        request: GenerationRequest | None = None,
    ) -> GenerationMeta:
        req = request or DEFAULT_REQUEST
        validate_request(req)

        classes = req.classes()
        enabled = req.enabled_classes()
        alphabet = build_alphabet(enabled)
        lookup = build_class_lookup(CHARACTER_CLASSES)

        logger.debug(
            "Generating %d-char password from %d-char alphabet (%s), up to %d attempts",
            req.length,
            len(alphabet),
            ", ".join(f"{c.name}>={c.minimum}" for c in enabled),
            req.max_retries,
        )

        attempts = 0
        with self.random_source() as source:
            while attempts < req.max_retries:
                attempts += 1
                candidate = bytes_to_password(source.read(req.length), alphabet)
                counts = count_classes(candidate, lookup)

                if satisfies_minimums(counts, classes):
                    logger.debug("Candidate accepted on attempt %d", attempts)
                    return GenerationMeta(
                        password=candidate,
                        attempts=attempts,
                        alphabet=alphabet,
                        class_counts=counts,
                        entropy_bits=req.length * math.log2(len(alphabet)),
                        request=req,
                    )

                logger.debug("Candidate rejected on attempt %d: %s", attempts, counts)

        logger.warning(
            "Gave up after %d attempts for length=%d with minimums %s",
            attempts,
            req.length,
            {c.name: c.minimum for c in classes},
        )
        raise GenerationExhaustedError(
            "unable to satisfy constraints within retry budget "
            f"({attempts} attempts)",
            attempts=attempts,
        )


def generate_password_with_meta(
    length: int = 16,
    upper_min: int = 2,
    lower_min: int = 2,
    numeric_min: int = 2,
    special_min: int = 2,
    max_retries: int = 100,
    random_source: RandomSourceFactory | None = None,
) -> GenerationMeta:
    request = GenerationRequest(
        length=length,
        upper_min=upper_min,
        lower_min=lower_min,
        numeric_min=numeric_min,
        special_min=special_min,
        max_retries=max_retries,
    )
    return ConstrainedPasswordGenerator(random_source).generate_with_meta(request)


def generate_password(
    length: int = 16,
    upper_min: int = 2,
    lower_min: int = 2,
    numeric_min: int = 2,
    special_min: int = 2,
    max_retries: int = 100,
    random_source: RandomSourceFactory | None = None,
) -> str:
    """
    High-level function:
    - Validate the minimums against the length.
    - Draw candidates from the secure source until one qualifies.
    - Return the password, or raise once the retry budget is spent.
    """
    return generate_password_with_meta(
        length=length,
        upper_min=upper_min,
        lower_min=lower_min,
        numeric_min=numeric_min,
        special_min=special_min,
        max_retries=max_retries,
        random_source=random_source,
    ).password
