"""Minimal terminal front end for the playback state machine."""

import asyncio
import sys
from typing import Awaitable, Callable, Optional, TextIO

from shared.logging import get_logger

from src.components.player.input_source import InputSource
from src.components.player.state_machine import PlaybackState, PlaybackStateMachine

# Initialize logger
logger = get_logger(__name__)

QUIT_COMMANDS = {"q", "quit", "exit"}
RESTART_COMMANDS = {"r", "restart"}
# An empty line is the Enter key
ADVANCE_COMMANDS = {"": "enter", "n": "right"}

LineReader = Callable[[], Awaitable[str]]


def describe_handle(handle: Optional[str]) -> str:
    """Short printable label for an image handle."""
    if not handle:
        return "none"
    if handle.startswith("data:"):
        header, _, data = handle.partition(",")
        mime = header[len("data:") :].split(";")[0] or "image"
        return f"<{mime}, {len(data)} chars>"
    return handle


async def read_stdin_line() -> str:
    line = await asyncio.get_running_loop().run_in_executor(None, sys.stdin.readline)
    if not line:
        raise EOFError
    return line.rstrip("\r\n")


class ConsolePlayer:
    def __init__(
        self,
        machine: PlaybackStateMachine,
        input_source: Optional[InputSource] = None,
        stream: TextIO = sys.stdout,
    ):
        self.machine = machine
        self.input_source = input_source or InputSource()
        self.stream = stream
        self._line_index: Optional[int] = None
        self._printed = 0
        self._unsubscribe = machine.subscribe(self.render)
        machine.attach(self.input_source)

    def render(self, state: PlaybackState) -> None:
        if state.line_index != self._line_index or len(state.revealed_text) < self._printed:
            self._begin_line(state)
        new_text = state.revealed_text[self._printed :]
        if new_text:
            self.stream.write(new_text)
            self._printed = len(state.revealed_text)
        if not state.is_revealing and self._printed == len(state.revealed_text):
            if self.machine.is_ended:
                self.stream.write("\n-- End of Script --\n")
            else:
                self.stream.write("  ▼\n")
            # Nothing more to write for this line until it changes
            self._printed = len(state.revealed_text) + 1
        self.stream.flush()

    def _begin_line(self, state: PlaybackState) -> None:
        self._line_index = state.line_index
        self._printed = 0
        view = self.machine.presentation()
        self.stream.write(
            f"\n[background: {describe_handle(view.background)}]"
            f" [portrait: {describe_handle(view.portrait)}]\n"
        )
        if view.speaker:
            label = f"{view.speaker} (Thinking)" if view.is_thought else view.speaker
            self.stream.write(f"{label}: ")

    def handle_command(self, command: str) -> bool:
        """Dispatch one line of user input; returns False when playback should stop."""
        command = command.strip().lower()
        if command in QUIT_COMMANDS:
            return False
        if command in RESTART_COMMANDS:
            self.input_source.restart()
        elif command in ADVANCE_COMMANDS:
            self.input_source.press(ADVANCE_COMMANDS[command])
        else:
            logger.debug(f"Ignoring unknown command: {command!r}")
        return True

    async def run(self, read_line: LineReader = read_stdin_line) -> None:
        """Feed input lines to a started machine until quit or end of input."""
        self.render(self.machine.state)
        try:
            while True:
                try:
                    command = await read_line()
                except EOFError:
                    break
                if not self.handle_command(command):
                    break
        finally:
            self.close()

    def close(self) -> None:
        self._unsubscribe()
        self.machine.close()
