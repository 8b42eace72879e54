"""Interactive lookup-and-compare loop."""

from collections.abc import Callable
from enum import Enum

import structlog

from rawg_compare.models.game import GameRecord
from rawg_compare.models.similarity import DEFAULT_WEIGHTS, SimilarityWeights
from rawg_compare.services.errors import AppError, handle_error
from rawg_compare.services.rawg_client import RawgClient
from rawg_compare.services.similarity import compare_games

from .display import format_game, format_not_found, format_similarity, format_suggestions

log = structlog.stdlib.get_logger()


EXIT_SENTINEL = "exit"
FIRST_PROMPT = f"Enter a game name (or type '{EXIT_SENTINEL}' to quit): "
SECOND_PROMPT = f"\nEnter the second game name (or type '{EXIT_SENTINEL}' to quit): "
FETCH_FAILED = "Failed to fetch game information. Try again."
TERMINATED = "Program terminated."


class LoopState(Enum):
    """States of the interaction loop."""
    AWAITING_FIRST_NAME = "awaiting_first_name"
    AWAITING_SECOND_NAME = "awaiting_second_name"
    TERMINATED = "terminated"


class CompareApp:
    """Prompts for two game names, shows both records and their similarity.

    The loop alternates between the two prompts until the exit sentinel (or
    end of input) is read at either one. Any failed or empty lookup sends the
    loop back to the first prompt.
    """

    def __init__(
        self,
        rawg_client: RawgClient,
        input_func: Callable[[str], str] | None = None,
        output_func: Callable[[str], None] | None = None,
        weights: SimilarityWeights = DEFAULT_WEIGHTS,
    ) -> None:
        """Initialize the loop.

        Args:
            rawg_client: Client used for every lookup
            input_func: Reads one line after showing a prompt, raising EOFError
                at end of input (defaults to the builtin input)
            output_func: Writes one block of text (defaults to print)
            weights: Category weights for the similarity score
        """
        self.rawg_client = rawg_client
        self._input = input_func or input
        self._output = output_func or print
        self.weights = weights

        self._state = LoopState.AWAITING_FIRST_NAME
        self._first_game: GameRecord | None = None

    @property
    def state(self) -> LoopState:
        return self._state

    async def run(self) -> int:
        """Run until the user quits.

        Returns:
            Exit code (always 0, failed lookups are not fatal)
        """
        log.info("Interaction loop started")

        while self._state is not LoopState.TERMINATED:
            await self.step()

        self._output(TERMINATED)
        log.info("Interaction loop finished")
        return 0

    async def step(self) -> None:
        """Handle one prompt and advance the state machine."""
        if self._state is LoopState.AWAITING_FIRST_NAME:
            await self._handle_first_name()
        elif self._state is LoopState.AWAITING_SECOND_NAME:
            await self._handle_second_name()

    async def _handle_first_name(self) -> None:
        name = self._read_name(FIRST_PROMPT)
        if name is None:
            self._state = LoopState.TERMINATED
            return
        if not name:
            return

        game = await self._lookup(name)
        if game is None:
            return

        self._output(format_game(game))
        self._first_game = game
        self._state = LoopState.AWAITING_SECOND_NAME

    async def _handle_second_name(self) -> None:
        name = self._read_name(SECOND_PROMPT)
        if name is None:
            self._state = LoopState.TERMINATED
            return
        if not name:
            return

        first_game = self._first_game
        self._first_game = None
        self._state = LoopState.AWAITING_FIRST_NAME

        game = await self._lookup(name)
        if game is None or first_game is None:
            return

        self._output(format_game(game))
        score = compare_games(first_game, game, self.weights)
        self._output(format_similarity(first_game, game, score, self.weights))

    def _read_name(self, prompt: str) -> str | None:
        """Read a trimmed name, or None when the user asked to quit."""
        try:
            raw = self._input(prompt)
        except EOFError:
            self._output("")
            log.info("End of input reached")
            return None

        name = raw.strip()
        if name.lower() == EXIT_SENTINEL:
            return None
        return name

    async def _lookup(self, name: str) -> GameRecord | None:
        """Fetch the best match, reporting failures and misses to the user."""
        try:
            game = await self.rawg_client.find_game(name)
        except AppError as e:
            friendly = handle_error(e, operation="find_game", component="CompareApp", context={"search": name})
            self._output(FETCH_FAILED)
            if friendly.suggested_actions:
                self._output(format_suggestions(friendly.suggested_actions))
            return None

        if game is None:
            self._output(format_not_found(name))
        return game
