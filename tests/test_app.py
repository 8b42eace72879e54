"""Tests for the interactive lookup-and-compare loop."""

from collections.abc import Iterable
from unittest.mock import AsyncMock

import pytest

from rawg_compare.models.game import GameRecord
from rawg_compare.services.errors import DecodeError, NetworkError
from rawg_compare.services.rawg_client import RawgClient
from rawg_compare.ui.app import (
    FETCH_FAILED,
    FIRST_PROMPT,
    SECOND_PROMPT,
    TERMINATED,
    CompareApp,
    LoopState,
)


SKYRIM = GameRecord(
    name="The Elder Scrolls V: Skyrim",
    rating=4.42,
    released="2011-11-11",
    description=None,
    genres=("Action", "RPG"),
    tags=("RPG", "Open World"),
    platforms=("PC", "Xbox 360"),
)
WITCHER = GameRecord(
    name="The Witcher 3: Wild Hunt",
    rating=4.65,
    released="2015-05-18",
    description="Geralt hunts monsters.",
    genres=("Action", "RPG"),
    tags=("RPG", "Action"),
    platforms=("PC", "Xbox 360"),
)


class ScriptedConsole:
    """Feeds scripted answers to prompts and records everything shown."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []
        self.output: list[str] = []

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self._answers:
            raise EOFError
        return self._answers.pop(0)

    def print(self, text: str) -> None:
        self.output.append(text)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


def make_app(answers: Iterable[str], *lookups: GameRecord | None | Exception) -> tuple[CompareApp, ScriptedConsole, AsyncMock]:
    console = ScriptedConsole(answers)
    client = AsyncMock(spec=RawgClient)
    client.find_game.side_effect = list(lookups)
    app = CompareApp(client, input_func=console.input, output_func=console.print)
    return app, console, client


class TestCompareApp:
    """Tests for CompareApp.run."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("sentinel", ["exit", "EXIT", "  Exit  "])
    async def test_exit_at_first_prompt_makes_no_request(self, sentinel: str) -> None:
        app, console, client = make_app([sentinel])

        exit_code = await app.run()

        assert exit_code == 0
        assert app.state is LoopState.TERMINATED
        client.find_game.assert_not_awaited()
        assert console.prompts == [FIRST_PROMPT]
        assert console.output == [TERMINATED]

    @pytest.mark.asyncio
    async def test_full_comparison(self) -> None:
        app, console, client = make_app(["skyrim", "witcher 3", "exit"], SKYRIM, WITCHER)

        exit_code = await app.run()

        assert exit_code == 0
        assert [c.args[0] for c in client.find_game.await_args_list] == ["skyrim", "witcher 3"]
        assert console.prompts == [FIRST_PROMPT, SECOND_PROMPT, FIRST_PROMPT]
        assert "Name: The Elder Scrolls V: Skyrim" in console.text
        assert "Description: No description available." in console.text
        assert "Name: The Witcher 3: Wild Hunt" in console.text
        # tags 1/3, genres 1, platforms 1
        assert (
            "Similarity between 'The Elder Scrolls V: Skyrim' and 'The Witcher 3: Wild Hunt' "
            "based on tags, genres, and platforms: 60.00"
        ) in console.text
        assert console.output[-1] == TERMINATED

    @pytest.mark.asyncio
    async def test_exit_at_second_prompt(self) -> None:
        app, console, client = make_app(["skyrim", "exit"], SKYRIM)

        await app.run()

        assert client.find_game.await_count == 1
        assert console.prompts == [FIRST_PROMPT, SECOND_PROMPT]
        assert "Similarity" not in console.text
        assert console.output[-1] == TERMINATED

    @pytest.mark.asyncio
    async def test_first_game_not_found(self) -> None:
        app, console, client = make_app(["nothing matches", "exit"], None)

        await app.run()

        assert "No game found with the name 'nothing matches'." in console.output
        assert console.prompts == [FIRST_PROMPT, FIRST_PROMPT]
        assert "Similarity" not in console.text

    @pytest.mark.asyncio
    async def test_second_game_not_found_skips_scoring(self) -> None:
        app, console, client = make_app(["skyrim", "nothing", "exit"], SKYRIM, None)

        await app.run()

        assert "No game found with the name 'nothing'." in console.output
        assert "Similarity" not in console.text
        assert console.prompts == [FIRST_PROMPT, SECOND_PROMPT, FIRST_PROMPT]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            NetworkError("Unable to connect to the server."),
            DecodeError("Invalid JSON format."),
        ],
    )
    async def test_fetch_failure_restarts_loop(self, error: Exception) -> None:
        app, console, client = make_app(["skyrim", "skyrim", "witcher", "exit"], error, SKYRIM, WITCHER)

        exit_code = await app.run()

        assert exit_code == 0
        assert console.output[0] == FETCH_FAILED
        assert console.prompts == [FIRST_PROMPT, FIRST_PROMPT, SECOND_PROMPT, FIRST_PROMPT]
        assert "Similarity" in console.text

    @pytest.mark.asyncio
    async def test_fetch_failure_shows_suggested_actions(self) -> None:
        app, console, client = make_app(["skyrim", "exit"], NetworkError("Authentication failed.", status_code=401))

        await app.run()

        assert console.output[0] == FETCH_FAILED
        assert console.output[1] == "  • Check that RAWG_API_KEY holds a valid key"
        assert console.output[-1] == TERMINATED

    @pytest.mark.asyncio
    async def test_second_fetch_failure_returns_to_first_prompt(self) -> None:
        app, console, client = make_app(
            ["skyrim", "witcher", "exit"],
            SKYRIM,
            NetworkError("The request timed out."),
        )

        await app.run()

        assert FETCH_FAILED in console.output
        assert console.prompts == [FIRST_PROMPT, SECOND_PROMPT, FIRST_PROMPT]
        assert "Similarity" not in console.text

    @pytest.mark.asyncio
    async def test_blank_name_reprompts_without_request(self) -> None:
        app, console, client = make_app(["   ", "", "exit"])

        await app.run()

        client.find_game.assert_not_awaited()
        assert console.prompts == [FIRST_PROMPT, FIRST_PROMPT, FIRST_PROMPT]

    @pytest.mark.asyncio
    async def test_end_of_input_terminates(self) -> None:
        app, console, client = make_app(["skyrim"], SKYRIM)

        exit_code = await app.run()

        assert exit_code == 0
        assert app.state is LoopState.TERMINATED
        assert console.output[-1] == TERMINATED

    @pytest.mark.asyncio
    async def test_repeated_comparisons(self) -> None:
        app, console, client = make_app(
            ["skyrim", "witcher", "witcher", "skyrim", "exit"],
            SKYRIM, WITCHER, WITCHER, SKYRIM,
        )

        await app.run()

        scores = [line for line in console.output if "Similarity between" in line]
        assert len(scores) == 2
        assert scores[0].splitlines()[1].endswith("60.00")
        assert scores[1].splitlines()[1].endswith("60.00")


class TestStateMachine:
    """Step-level state transitions."""

    @pytest.mark.asyncio
    async def test_transitions(self) -> None:
        app, console, client = make_app(["skyrim", "witcher", "exit"], SKYRIM, WITCHER)

        assert app.state is LoopState.AWAITING_FIRST_NAME
        await app.step()
        assert app.state is LoopState.AWAITING_SECOND_NAME
        await app.step()
        assert app.state is LoopState.AWAITING_FIRST_NAME
        await app.step()
        assert app.state is LoopState.TERMINATED
