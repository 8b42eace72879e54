"""Set-based similarity scoring between two games."""

from collections.abc import Iterable

import structlog

from ..models.game import GameRecord
from ..models.similarity import DEFAULT_WEIGHTS, SimilarityScore, SimilarityWeights

log = structlog.stdlib.get_logger()


def jaccard_index(first: Iterable[str], second: Iterable[str]) -> float:
    """Return |A ∩ B| / |A ∪ B| over the deduplicated names.

    Two empty collections have nothing in common, so their index is 0.0.
    """
    set1 = set(first)
    set2 = set(second)

    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def weighted_score(
    tag_similarity: float,
    genre_similarity: float,
    platform_similarity: float,
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
) -> float:
    """Combine per-category indices into a 0-100 score."""
    total = (
        tag_similarity * weights.tags
        + genre_similarity * weights.genres
        + platform_similarity * weights.platforms
    )
    return min(max(total * 100.0, 0.0), 100.0)


def enhanced_similarity(
    tags1: Iterable[str],
    tags2: Iterable[str],
    genres1: Iterable[str],
    genres2: Iterable[str],
    platforms1: Iterable[str],
    platforms2: Iterable[str],
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
) -> float:
    """Weighted similarity of two games' tags, genres and platforms, 0-100."""
    return weighted_score(
        jaccard_index(tags1, tags2),
        jaccard_index(genres1, genres2),
        jaccard_index(platforms1, platforms2),
        weights,
    )


def compare_games(
    game1: GameRecord,
    game2: GameRecord,
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
) -> SimilarityScore:
    """Score two records, keeping the per-category breakdown."""
    tags = jaccard_index(game1.tags, game2.tags)
    genres = jaccard_index(game1.genres, game2.genres)
    platforms = jaccard_index(game1.platforms, game2.platforms)

    score = SimilarityScore(
        tags=tags,
        genres=genres,
        platforms=platforms,
        total=weighted_score(tags, genres, platforms, weights),
    )
    log.debug(
        "Similarity computed",
        first=game1.name,
        second=game2.name,
        tags=tags,
        genres=genres,
        platforms=platforms,
        total=score.total,
    )
    return score
