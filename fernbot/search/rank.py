# Ranking helpers: full scan of the candidate set, best match + sorted list.
# Stateless; the scan order is whatever the store returned.

from __future__ import annotations
import math
from typing import Iterable, List, Optional

from .scoring import SimilarityScorer
from .types import Entry, Match, Query, RankResult

DEFAULT_THRESHOLD = -1000.0


def rank(query: Query, entries: Iterable[Entry], scorer: SimilarityScorer) -> RankResult:
    """Score every entry once.

    Entries where no signal fired stay at -inf and never become ``best``.

    Ties for best go to the first entry seen (strict ``>``), and ``ranked``
    is a stable sort, so equal scores keep the store's order.
    """
    best: Optional[Match] = None
    best_score = float("-inf")
    matches: List[Match] = []
    text = query.search_text
    for entry in entries:
        res = scorer.score(text, entry, keywords=query.keywords)
        match = Match(entry=entry, score=res.score, signals=res.signals)
        matches.append(match)
        if match.score > best_score:
            best, best_score = match, match.score

    ranked = sorted(matches, key=lambda m: m.score, reverse=True)
    return RankResult(best=best, ranked=ranked)


def is_acceptable(match: Optional[Match], threshold: float = DEFAULT_THRESHOLD) -> bool:
    return match is not None and match.score > threshold


def suggestions(result: RankResult, limit: int = 3) -> List[str]:
    """Questions of the top-ranked matches that scored at all, for "did you mean"."""
    out: List[str] = []
    for m in result.ranked:
        if len(out) >= limit:
            break
        if not math.isfinite(m.score):
            break
        q = m.entry.question_text
        if q and q not in out:
            out.append(q)
    return out
