# Makes the folder importable as a package.
# Exports the engine and the core types for convenience.

from .types import Entry, Match, Persona, Query, RankResult, SearchTrace
from .personas import PersonaDetector
from .scoring import SignalWeights, SimilarityScorer
from .engine import QAEngine, Reply

__all__ = [
    "Entry",
    "Match",
    "Persona",
    "Query",
    "RankResult",
    "SearchTrace",
    "PersonaDetector",
    "SignalWeights",
    "SimilarityScorer",
    "QAEngine",
    "Reply",
]
