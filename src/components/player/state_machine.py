"""
Line-by-line playback of a parsed script over its generated assets.

The machine owns a single cooperative reveal task at a time. Every mutation
happens on the event loop thread, so cancelling the reveal and showing the
full text in advance() cannot interleave with a reveal tick.
"""

import asyncio
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from shared.config import config
from shared.logging import get_logger

from src.components.player.input_source import ADVANCE, RESTART, InputSource
from src.components.player.resolver import (
    match_exact_scene,
    match_heading_scene,
    resolve_background,
    resolve_character_image,
)
from src.components.script_model import (
    NEUTRAL,
    THINKING,
    GeneratedAssets,
    LineType,
    ParsedScript,
    ScriptLine,
)

# Initialize logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class ActiveCharacter:
    name: str
    emotion: str


@dataclass(frozen=True)
class PlaybackState:
    line_index: int = 0
    active_scene_id: Optional[str] = None
    active_character: Optional[ActiveCharacter] = None
    revealed_text: str = ""
    is_revealing: bool = True


@dataclass(frozen=True)
class LinePresentation:
    """Everything a renderer needs to draw the current line."""

    background: Optional[str]
    portrait: Optional[str]
    speaker: Optional[str]
    text: str
    is_revealing: bool
    is_thought: bool
    is_narration: bool


StateListener = Callable[[PlaybackState], None]


class PlaybackStateMachine:
    def __init__(
        self,
        script: ParsedScript,
        assets: GeneratedAssets,
        reveal_interval: Optional[float] = None,
    ):
        """
        Args:
            script: The parsed script to play.
            assets: Generated scenes and characters for the script.
            reveal_interval: Seconds between revealed characters. Zero or less
                reveals each line at once. Defaults to the configured cadence.
        """
        self.script = script
        self.scenes = assets.scenes
        self.characters = assets.characters
        self.reveal_interval = (
            config.REVEAL_INTERVAL_SECONDS if reveal_interval is None else reveal_interval
        )
        self._state = PlaybackState()
        self._reveal_task: Optional["asyncio.Task[None]"] = None
        self._listeners: List[StateListener] = []
        self._detach_input: List[Callable[[], None]] = []

    # ---- observation ----
    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def current_line(self) -> Optional[ScriptLine]:
        if 0 <= self._state.line_index < len(self.script.lines):
            return self.script.lines[self._state.line_index]
        return None

    @property
    def display_text(self) -> str:
        line = self.current_line
        return line.display_text if line else ""

    @property
    def is_last_line(self) -> bool:
        return self._state.line_index >= len(self.script.lines) - 1

    @property
    def is_ended(self) -> bool:
        """True once the last line is fully shown; advance() is then a no-op."""
        if not self.script.lines:
            return True
        return self.is_last_line and not self._state.is_revealing

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def presentation(self) -> LinePresentation:
        line = self.current_line
        active = self._state.active_character
        portrait = (
            resolve_character_image(self.characters, active.name, active.emotion)
            if active
            else None
        )
        line_type = line.type if line else None
        speaker = (
            line.speaker
            if line and line.speaker and line_type != LineType.NARRATION
            else None
        )
        return LinePresentation(
            background=resolve_background(self.scenes, self._state.active_scene_id),
            portrait=portrait,
            speaker=speaker,
            text=self._state.revealed_text,
            is_revealing=self._state.is_revealing,
            is_thought=line_type == LineType.THOUGHT,
            is_narration=line_type == LineType.NARRATION,
        )

    # ---- control ----
    def start(self) -> None:
        """Enter the first line. Needs a running event loop unless reveal is instant."""
        if self.script.lines:
            self._enter_line(0)
        else:
            logger.warning("Script has no lines; nothing to play.")
            self._set(is_revealing=False)

    def advance(self) -> None:
        if self._state.is_revealing:
            # Skip the animation: show the whole line, stay on it
            self._cancel_reveal()
            self._set(revealed_text=self.display_text, is_revealing=False)
        elif not self.is_last_line:
            self._enter_line(self._state.line_index + 1)
        else:
            logger.debug("Advance ignored: end of script reached.")

    def restart(self) -> None:
        """Discard all playback state and play again from the first line."""
        logger.info("Restarting playback.")
        self._cancel_reveal()
        self._set_state(PlaybackState())
        self.start()

    def attach(self, input_source: InputSource) -> None:
        self._detach_input.append(input_source.subscribe(ADVANCE, self.advance))
        self._detach_input.append(input_source.subscribe(RESTART, self.restart))

    def close(self) -> None:
        """Cancel any reveal and drop every input and state subscription."""
        self._cancel_reveal()
        for unsubscribe in self._detach_input:
            unsubscribe()
        self._detach_input.clear()
        self._listeners.clear()

    async def wait_for_reveal(self) -> None:
        """Wait until the current reveal finishes or is cancelled."""
        task = self._reveal_task
        if task is not None:
            # asyncio.wait does not raise when the reveal itself is cancelled
            await asyncio.wait({task})

    # ---- transitions ----
    def _enter_line(self, index: int) -> None:
        self._cancel_reveal()
        line = self.script.lines[index]
        text = line.display_text
        logger.debug(f"Entering line {index} ({line.type.value}): {text}")

        self._set(
            line_index=index,
            active_scene_id=self._resolve_scene(line),
            active_character=self._resolve_character(line),
            revealed_text="",
            is_revealing=True,
        )

        if not text or self.reveal_interval <= 0:
            self._set(revealed_text=text, is_revealing=False)
            return
        self._reveal_task = asyncio.get_running_loop().create_task(self._reveal(text))

    def _resolve_scene(self, line: ScriptLine) -> Optional[str]:
        current = self._state.active_scene_id
        if line.type == LineType.SCENE_HEADING:
            scene = match_heading_scene(self.scenes, line.scene_description)
        elif line.scene_description:
            scene = match_exact_scene(self.scenes, line.scene_description)
        else:
            return current
        return scene.id if scene else current

    def _resolve_character(self, line: ScriptLine) -> Optional[ActiveCharacter]:
        current = self._state.active_character
        if line.type == LineType.DIALOGUE and line.speaker:
            return ActiveCharacter(name=line.speaker, emotion=line.emotion or NEUTRAL)
        if line.type == LineType.THOUGHT and line.speaker:
            return ActiveCharacter(name=line.speaker, emotion=THINKING)
        if line.type == LineType.SCENE_HEADING:
            return None
        return current

    async def _reveal(self, text: str) -> None:
        for count in range(1, len(text) + 1):
            await asyncio.sleep(self.reveal_interval)
            if self._reveal_task is not asyncio.current_task():
                return
            if count == len(text):
                self._set(revealed_text=text, is_revealing=False)
            else:
                self._set(revealed_text=text[:count])
        self._reveal_task = None

    def _cancel_reveal(self) -> None:
        task = self._reveal_task
        self._reveal_task = None
        if task is not None and not task.done():
            task.cancel()

    def _set(self, **changes) -> None:
        self._set_state(replace(self._state, **changes))

    def _set_state(self, state: PlaybackState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
