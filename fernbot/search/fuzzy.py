"""
Approximate string scorer used by the similarity scorer.

A needle only aligns with a haystack when all of its characters occur in the
haystack in order (case-insensitive). Aligned pairs are scored with RapidFuzz's
normalized Indel ratio, rescaled to a signed range:

    score = (ratio - 100) * SCALE      ->  -3000 (worst) .. 0 (identical)

The bonuses and floors in ``scoring.SignalWeights`` are tuned against this
range. Swapping the ratio function means re-tuning those constants.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from rapidfuzz import fuzz
from rapidfuzz.distance import LCSseq

SCALE = 30.0


@dataclass(frozen=True)
class FuzzyResult:
    score: float
    ratio: float


def fuzzy_match(needle, haystack) -> Optional[FuzzyResult]:
    if not isinstance(needle, str) or not isinstance(haystack, str):
        return None
    n = needle.strip().lower()
    h = haystack.strip().lower()
    if not n or not h:
        return None
    if LCSseq.similarity(n, h) < len(n):
        return None
    ratio = fuzz.ratio(n, h)
    return FuzzyResult(score=(ratio - 100.0) * SCALE, ratio=ratio)
