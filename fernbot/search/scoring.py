# Multi-signal similarity scorer.
# Each signal contributes a fixed bonus when it fires; an entry's score is the
# maximum over fired signals (not the sum), starting from -inf.

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from typing import Callable, List, Optional, Sequence

import yaml

from .fuzzy import FuzzyResult, fuzzy_match
from ..errors import ConfigurationError
from .normalize import extract_keywords
from .types import Entry

NO_MATCH = float("-inf")


@dataclass(frozen=True)
class SignalWeights:
    """Contribution table for the scorer. Operators can override it via YAML."""
    exact_question: float = 1000.0
    fuzzy_question_offset: float = 500.0
    exact_keyword: float = 800.0
    fuzzy_keyword_offset: float = 300.0
    fuzzy_keyword_floor: float = -2000.0
    partial_keyword: float = 600.0
    word_overlap: float = 400.0
    char_overlap: float = 300.0
    # words must be longer than this for the partial/word-overlap signals
    min_word_len: int = 2
    char_overlap_ratio: float = 0.6
    char_overlap_max_len_diff: int = 2

    @classmethod
    def from_yaml(cls, path: Optional[str]) -> "SignalWeights":
        if not path or not os.path.exists(path):
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a mapping of signal weights")
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class ScoreResult:
    score: float = NO_MATCH
    signals: List[str] = field(default_factory=list)

    def fire(self, name: str, value: float, detail: str) -> None:
        self.signals.append(f"{name}[{detail}]={value:g}")
        if value > self.score:
            self.score = value


def _entry_keywords(entry: Entry) -> List[str]:
    if not isinstance(entry.keywords, (list, tuple)):
        return []
    return [k.lower() for k in entry.keywords if isinstance(k, str) and k.strip()]


def same_position_ratio(a: str, b: str) -> float:
    """Share of same-position characters, over the shorter word's length."""
    shorter = min(len(a), len(b))
    if shorter == 0:
        return 0.0
    same = sum(1 for x, y in zip(a, b) if x == y)
    return same / shorter


class SimilarityScorer:
    def __init__(
        self,
        weights: Optional[SignalWeights] = None,
        fuzzy: Callable[[str, str], Optional[FuzzyResult]] = fuzzy_match,
    ):
        self.weights = weights or SignalWeights()
        self.fuzzy = fuzzy

    def score(self, query: str, entry: Entry, keywords: Optional[Sequence[str]] = None) -> ScoreResult:
        """Score one entry against the (cleaned) query text."""
        w = self.weights
        result = ScoreResult()
        if not isinstance(query, str) or not query.strip():
            return result
        if keywords is None:
            keywords = extract_keywords(query)

        question = entry.question_text
        q_lower = question.lower() if question else ""
        q_words = extract_keywords(question) if question else []
        e_keywords = _entry_keywords(entry)

        # --- signals against the question ---
        if q_lower:
            hit = next((kw for kw in keywords if kw in q_lower), None)
            if hit is not None:
                result.fire("exact_question", w.exact_question, hit)

            fz = self.fuzzy(query, question)
            if fz is not None:
                result.fire("fuzzy_question", fz.score + w.fuzzy_question_offset, question)

        # --- signals against entry keywords ---
        if e_keywords:
            hit = next(
                (
                    (kw, ek)
                    for kw in keywords
                    for ek in e_keywords
                    if kw in ek or ek in kw
                ),
                None,
            )
            if hit is not None:
                result.fire("exact_keyword", w.exact_keyword, f"{hit[0]}~{hit[1]}")

            best_fuzzy: Optional[tuple] = None
            for ek in e_keywords:
                fz = self.fuzzy(query, ek)
                if fz is None or fz.score <= w.fuzzy_keyword_floor:
                    continue
                if best_fuzzy is None or fz.score > best_fuzzy[0]:
                    best_fuzzy = (fz.score, ek)
            if best_fuzzy is not None:
                result.fire("fuzzy_keyword", best_fuzzy[0] + w.fuzzy_keyword_offset, best_fuzzy[1])

            hit = next(
                (
                    (kw, ek)
                    for kw in keywords
                    if len(kw) > w.min_word_len
                    for ek in e_keywords
                    if kw in ek
                ),
                None,
            )
            if hit is not None:
                result.fire("partial_keyword", w.partial_keyword, f"{hit[0]}~{hit[1]}")

        # --- word-level heuristics ---
        hit = next(
            (
                (kw, word)
                for kw in keywords
                if len(kw) > w.min_word_len
                for word in q_words
                if len(word) > w.min_word_len and (kw in word or word in kw)
            ),
            None,
        )
        if hit is not None:
            result.fire("word_overlap", w.word_overlap, f"{hit[0]}~{hit[1]}")

        hit = next(
            (
                (kw, word)
                for kw in keywords
                for word in (*q_words, *e_keywords)
                if abs(len(kw) - len(word)) <= w.char_overlap_max_len_diff
                and same_position_ratio(kw, word) >= w.char_overlap_ratio
            ),
            None,
        )
        if hit is not None:
            result.fire("char_overlap", w.char_overlap, f"{hit[0]}~{hit[1]}")

        return result
