"""
Mapping logic: turn random bytes into candidate passwords and check
candidates against the per-class minimums.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from .config import CharacterClass


def build_alphabet(classes: Iterable[CharacterClass]) -> str:
    """
    Concatenate the character sets of every enabled class, in order.
    The classes are disjoint, so nothing needs deduplicating.
    """
    return "".join(c.characters for c in classes if c.enabled)


def build_class_lookup(classes: Iterable[CharacterClass]) -> dict[str, str]:
    """
    Precompute character -> class name for O(1) membership checks.
    """
    lookup: dict[str, str] = {}
    for cls in classes:
        for ch in cls.characters:
            if ch in lookup:
                raise ValueError(
                    f"Character {ch!r} belongs to both {lookup[ch]!r} and {cls.name!r}"
                )
            lookup[ch] = cls.name
    return lookup


def bytes_to_password(data: bytes, alphabet: str) -> str:
    """
    Map each byte to `alphabet[byte % len(alphabet)]`.

    This keeps the slight modulo bias for alphabets that do not divide 256.
    """
    if not alphabet:
        raise ValueError("alphabet must not be empty")

    alphabet_size = len(alphabet)
    return "".join(alphabet[b % alphabet_size] for b in data)


def count_classes(candidate: str, lookup: Mapping[str, str]) -> dict[str, int]:
    """
    Count how many characters of each class appear in `candidate`.
    Characters outside every class are ignored.
    """
    counts = dict.fromkeys(lookup.values(), 0)
    for ch in candidate:
        name = lookup.get(ch)
        if name is not None:
            counts[name] += 1
    return counts


def satisfies_minimums(
    counts: Mapping[str, int],
    classes: Iterable[CharacterClass],
) -> bool:
    return all(counts.get(c.name, 0) >= c.minimum for c in classes)
