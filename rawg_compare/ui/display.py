"""Text rendering for game records and similarity scores."""

from rawg_compare.models.game import GameRecord
from rawg_compare.models.similarity import DEFAULT_WEIGHTS, SimilarityScore, SimilarityWeights


UNKNOWN_RELEASE = "Unknown"
NO_DESCRIPTION = "No description available."


def format_rating(rating: float) -> str:
    """Render a rating without trailing zeros (4.0 -> "4", 4.47 -> "4.47")."""
    return f"{rating:g}"


def format_game(game: GameRecord) -> str:
    """Render one record the way it is shown after a lookup."""
    lines = [
        "",
        f"Name: {game.name}",
        f"Released: {game.released or UNKNOWN_RELEASE}",
        f"Rating: {format_rating(game.rating)}",
        f"Description: {game.description or NO_DESCRIPTION}",
        f"Genres: {', '.join(game.genres)}",
        f"Tags: {', '.join(game.tags)}",
        f"Platforms: {', '.join(game.platforms)}",
    ]
    return "\n".join(lines)


def format_similarity(
    first: GameRecord,
    second: GameRecord,
    score: SimilarityScore,
    weights: SimilarityWeights = DEFAULT_WEIGHTS,
) -> str:
    """Render the score line followed by the per-category breakdown."""
    return "\n".join([
        "",
        f"Similarity between '{first.name}' and '{second.name}' "
        f"based on tags, genres, and platforms: {score.total:.2f}",
        f"  Tags:      {score.tags * 100:6.2f}% (weight {weights.tags:.2f})",
        f"  Genres:    {score.genres * 100:6.2f}% (weight {weights.genres:.2f})",
        f"  Platforms: {score.platforms * 100:6.2f}% (weight {weights.platforms:.2f})",
    ])


def format_not_found(name: str) -> str:
    return f"No game found with the name '{name}'."


def format_suggestions(actions: list[str], limit: int = 3) -> str:
    """Render suggested next steps as an indented bullet list."""
    return "\n".join(f"  • {action}" for action in actions[:limit])
