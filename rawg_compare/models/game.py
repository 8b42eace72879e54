"""Game-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class GameRecord:
    """The subset of RAWG game metadata the client consumes."""
    name: str
    rating: float
    released: str | None = None
    description: str | None = None
    genres: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    platforms: tuple[str, ...] = ()


@dataclass(frozen=True)
class SearchResult:
    """Ordered search hits for one query."""
    games: tuple[GameRecord, ...] = field(default_factory=tuple)
    count: int = 0  # Total matches reported by the API

    def first(self) -> GameRecord | None:
        """Return the top hit, or None when the search matched nothing."""
        return self.games[0] if self.games else None
