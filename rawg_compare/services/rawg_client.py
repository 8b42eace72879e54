"""RAWG metadata service for looking up games by name."""

import json
from typing import Any

import httpx
import structlog

from ..models.game import GameRecord, SearchResult
from .errors import DecodeError, get_error_service
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()


class RawgClient:
    """Service for searching the RAWG games endpoint."""

    def __init__(
        self,
        http_client: HttpClientService,
        api_key: str,
        base_url: str = "https://api.rawg.io/api",
    ) -> None:
        """Initialize the RAWG client.

        Args:
            http_client: HTTP client service for making requests
            api_key: RAWG API key sent as the ``key`` query parameter
            base_url: API root, without a trailing slash
        """
        self.http_client: HttpClientService = http_client
        self.base_url: str = base_url.rstrip("/")
        self._api_key: str = api_key

        log.debug("RAWG client initialized", base_url=self.base_url)

    @property
    def games_url(self) -> str:
        return f"{self.base_url}/games"

    async def search(self, name: str, page_size: int = 1) -> SearchResult:
        """Search for games matching a free-text name.

        Args:
            name: Game name as typed by the user
            page_size: Number of hits to request

        Returns:
            SearchResult with the decoded hits in API order

        Raises:
            NetworkError: If the request fails or returns a non-success status
            DecodeError: If the body is not a valid games response
        """
        params: dict[str, str | int] = {
            "key": self._api_key,
            "search": name,
            "page_size": page_size,
        }

        try:
            response = await self.http_client.get(self.games_url, params=params)
        except httpx.HTTPError as e:
            raise get_error_service().convert_error(e, {"url": self.games_url}) from e

        try:
            payload = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(
                "The RAWG API returned a response that is not valid JSON.",
                original_error=e,
            ) from e

        result = parse_search_result(payload)
        log.info("RAWG search completed", search=name, hits=len(result.games), count=result.count)
        return result

    async def find_game(self, name: str) -> GameRecord | None:
        """Look up the best match for a name.

        Returns:
            The top hit, or None when nothing matched
        """
        result = await self.search(name, page_size=1)
        game = result.first()
        if game is None:
            log.info("No game found", search=name)
        return game


def parse_search_result(payload: Any) -> SearchResult:
    """Decode a ``/games`` response body.

    Raises:
        DecodeError: If the body does not have a ``results`` list of games
    """
    if not isinstance(payload, dict):
        raise DecodeError("Expected a JSON object from the games endpoint.")

    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeError("The games response has no results list.", field="results")

    games = tuple(parse_game_record(item) for item in results)

    count = payload.get("count")
    if not isinstance(count, int) or isinstance(count, bool):
        count = len(games)

    return SearchResult(games=games, count=count)


def parse_game_record(data: Any) -> GameRecord:
    """Decode one entry of the ``results`` array into a GameRecord.

    ``name``, ``rating``, ``genres`` and ``tags`` are required; ``released``,
    ``description`` and ``platforms`` may be missing or null.

    Raises:
        DecodeError: If a required field is missing or has the wrong type
    """
    if not isinstance(data, dict):
        raise DecodeError("Expected a JSON object for a game.")

    name = data.get("name")
    if not isinstance(name, str):
        raise DecodeError("Game is missing its name.", field="name")

    rating = data.get("rating")
    if not isinstance(rating, (int, float)) or isinstance(rating, bool):
        raise DecodeError(f"Game '{name}' has no numeric rating.", field="rating")

    platforms_raw = data.get("platforms")
    if platforms_raw is None:
        platforms: tuple[str, ...] = ()
    else:
        platforms = tuple(
            _named(_require_dict(entry, "platforms"), "platforms.platform")
            for entry in _require_list(platforms_raw, "platforms")
        )

    return GameRecord(
        name=name,
        rating=float(rating),
        released=_optional_str(data, "released"),
        description=_optional_str(data, "description"),
        genres=_names(data, "genres"),
        tags=_names(data, "tags"),
        platforms=platforms,
    )


def _names(data: dict[str, Any], key: str) -> tuple[str, ...]:
    """Extract the ``name`` of every object in a required list field."""
    if key not in data:
        raise DecodeError(f"Game is missing its {key}.", field=key)
    return tuple(_name_of(item, key) for item in _require_list(data[key], key))


def _named(entry: dict[str, Any], field: str) -> str:
    """Extract ``entry["platform"]["name"]``."""
    return _name_of(entry.get("platform"), field)


def _name_of(item: Any, field: str) -> str:
    if not isinstance(item, dict) or not isinstance(item.get("name"), str):
        raise DecodeError(f"Expected an object with a name in {field}.", field=field)
    return item["name"]


def _require_list(value: Any, field: str) -> list[Any]:
    if not isinstance(value, list):
        raise DecodeError(f"Expected a list for {field}.", field=field)
    return value


def _require_dict(value: Any, field: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"Expected an object in {field}.", field=field)
    return value


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"Expected text for {key}.", field=key)
    return value
