"""
Similarity primitives used by the resolution stages.

String functions normalize their inputs themselves; ``normalize`` is
idempotent, so passing already-normalized text is safe.
"""
import math
from collections import Counter
from typing import Sequence

import numpy as np
from rapidfuzz.distance import Levenshtein

from .normalizer import normalize


def is_exact_match(a: str, b: str) -> bool:
    """Normalized equality. Empty strings never match."""
    a, b = normalize(a), normalize(b)
    return bool(a) and a == b


def is_containment_match(a: str, b: str, min_length: int = 5) -> bool:
    """
    Check whether one normalized string contains the other.

    The shorter string must be at least ``min_length`` characters long so that
    fragments like "a" or "is" do not match everything.
    """
    a, b = normalize(a), normalize(b)
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if not shorter or len(shorter) < min_length:
        return False
    return shorter in longer


def _bigrams(text: str) -> Counter:
    return Counter(text[i:i + 2] for i in range(len(text) - 1))


def dice_coefficient(a: str, b: str) -> float:
    """
    Sørensen-Dice similarity over character bigrams (with multiplicity).

    :return: 1.0 for identical non-empty strings, 0.0 when either side is
             too short to form a bigram, otherwise 2*|A∩B| / (|A|+|B|)
    """
    a, b = normalize(a), normalize(b)
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0

    bigrams_a, bigrams_b = _bigrams(a), _bigrams(b)
    total = sum(bigrams_a.values()) + sum(bigrams_b.values())
    if total == 0:
        return 0.0

    overlap = sum((bigrams_a & bigrams_b).values())
    return 2.0 * overlap / total


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance between the normalized strings."""
    return Levenshtein.distance(normalize(a), normalize(b))


def edit_tolerance(query: str, ratio: float = 0.35) -> int:
    """Largest edit distance still accepted for a query of this length."""
    return max(2, math.ceil(ratio * len(normalize(query))))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity of two equal-length vectors.

    :raises ValueError: if the vectors differ in length
    :return: dot(a, b) / (|a| * |b|), or 0.0 if either norm is zero
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        raise ValueError(f"Vector dimensions differ: {va.shape} vs {vb.shape}")

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))
