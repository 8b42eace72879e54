"""Similarity scoring data models."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class SimilarityWeights:
    """Relative importance of each metadata category."""
    tags: float = 0.60
    genres: float = 0.35
    platforms: float = 0.05

    def __post_init__(self) -> None:
        weights = (self.tags, self.genres, self.platforms)
        if any(w < 0 for w in weights):
            raise ValueError("similarity weights must be non-negative")
        if not math.isclose(sum(weights), 1.0, abs_tol=1e-9):
            raise ValueError(f"similarity weights must sum to 1.0, got {sum(weights)}")


DEFAULT_WEIGHTS = SimilarityWeights()


@dataclass(frozen=True)
class SimilarityScore:
    """Per-category Jaccard indices and the weighted 0-100 total."""
    tags: float
    genres: float
    platforms: float
    total: float
