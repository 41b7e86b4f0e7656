"""Tests for the terminal front end."""

import asyncio
import io

import pytest
from src.components.player.console import ConsolePlayer, describe_handle
from src.components.player.input_source import InputSource
from src.components.player.state_machine import PlaybackStateMachine
from src.components.script_model import (
    Character,
    GeneratedAssets,
    ParsedScript,
    Scene,
)


@pytest.fixture
def machine():
    script = ParsedScript.model_validate(
        {
            "characters": [{"name": "Maya", "description": "Barista"}],
            "scenes": [{"id": "cafe", "description": "Cafe"}],
            "lines": [
                {"id": "1", "type": "DIALOGUE", "speaker": "Maya", "text": "Hi!"},
                {"id": "2", "type": "NARRATION", "text": "The end."},
            ],
        }
    )
    assets = GeneratedAssets(
        scenes=[Scene(id="cafe", description="Cafe", image="data:image/png;base64,QUJD")],
        characters=[
            Character(name="Maya", description="Barista", visuals={"neutral": "maya.png"})
        ],
    )
    return PlaybackStateMachine(script, assets, reveal_interval=0)


def test_describe_handle():
    assert describe_handle(None) == "none"
    assert describe_handle("data:image/png;base64,QUJD") == "<image/png, 4 chars>"
    assert describe_handle("https://img/1.png") == "https://img/1.png"


def test_console_plays_until_end(machine):
    stream = io.StringIO()
    commands = iter(["", "", "q"])

    async def read_line():
        return next(commands)

    async def scenario():
        machine.start()
        player = ConsolePlayer(machine, InputSource(), stream=stream)
        await player.run(read_line)

    asyncio.run(scenario())
    output = stream.getvalue()

    assert "[background: <image/png, 4 chars>] [portrait: maya.png]" in output
    assert "Maya: Hi!" in output
    assert "The end." in output
    assert "-- End of Script --" in output
    # Playback was torn down on quit
    assert machine.state.line_index == 1


def test_console_stops_on_end_of_input(machine):
    stream = io.StringIO()

    async def read_line():
        raise EOFError

    async def scenario():
        machine.start()
        await ConsolePlayer(machine, stream=stream).run(read_line)

    asyncio.run(scenario())
    assert "Maya: Hi!" in stream.getvalue()


def test_handle_command(machine):
    machine.start()
    player = ConsolePlayer(machine, InputSource(), stream=io.StringIO())

    assert player.handle_command("n") is True
    assert machine.state.line_index == 1
    assert player.handle_command("r") is True
    assert machine.state.line_index == 0
    assert player.handle_command("xyz") is True
    assert machine.state.line_index == 0
    assert player.handle_command("Q") is False
