"""Data models for the RAWG comparison client."""

from .config import AppConfig
from .game import GameRecord, SearchResult
from .similarity import DEFAULT_WEIGHTS, SimilarityScore, SimilarityWeights

__all__ = [
    "AppConfig",
    "DEFAULT_WEIGHTS",
    "GameRecord",
    "SearchResult",
    "SimilarityScore",
    "SimilarityWeights",
]
