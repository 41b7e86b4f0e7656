"""Playback component."""

from .console import ConsolePlayer
from .input_source import ADVANCE, RESTART, InputSource
from .resolver import resolve_background, resolve_character_image
from .state_machine import (
    ActiveCharacter,
    LinePresentation,
    PlaybackState,
    PlaybackStateMachine,
)

__all__ = [
    "ADVANCE",
    "RESTART",
    "ActiveCharacter",
    "ConsolePlayer",
    "InputSource",
    "LinePresentation",
    "PlaybackState",
    "PlaybackStateMachine",
    "resolve_background",
    "resolve_character_image",
]
