#!/usr/bin/env python3
"""
This file contains the session flow for turning a script into a playable
visual novel: analysis -> asset generation -> playback.
"""

from enum import Enum
from typing import Optional, Protocol

from shared.errors import AnalysisError, RenderError, SessionError
from shared.logging import get_logger

from src.components.asset_generator import AssetGenerationPipeline, AssetProducer
from src.components.asset_generator.generator import ProgressObserver
from src.components.player import InputSource, PlaybackStateMachine
from src.components.script_model import (
    GeneratedAssets,
    GenerationProgress,
    ParsedScript,
)

# Initialize logger
logger = get_logger(__name__)


class ScreenState(str, Enum):
    EDITOR = "EDITOR"
    GENERATING = "GENERATING"
    PLAYING = "PLAYING"


class Analyzer(Protocol):
    async def analyze(self, raw_text: str) -> ParsedScript: ...


class NovelSession:
    """
    Owns one script's journey from raw text to playback.

    Analysis and background failures abort the run, discard everything built
    so far and return the session to the editor with a generic message.
    """

    def __init__(
        self,
        analyzer: Analyzer,
        producer: AssetProducer,
        on_progress: Optional[ProgressObserver] = None,
        reveal_interval: Optional[float] = None,
    ):
        self.analyzer = analyzer
        self.producer = producer
        self.on_progress = on_progress
        self.reveal_interval = reveal_interval
        self.screen = ScreenState.EDITOR
        self.script: Optional[ParsedScript] = None
        self.assets: Optional[GeneratedAssets] = None
        self.progress = GenerationProgress(total=0, current=0, status="")
        self.player: Optional[PlaybackStateMachine] = None

    def _observe(self, progress: GenerationProgress) -> None:
        self.progress = progress
        if self.on_progress is not None:
            self.on_progress(progress)

    async def analyze(self, raw_text: str) -> ParsedScript:
        """Run only the analysis step, e.g. for a dry run."""
        try:
            return await self.analyzer.analyze(raw_text)
        except AnalysisError as e:
            logger.error(f"Pipeline failed with {type(e).__name__}: {e}")
            raise SessionError() from e

    async def process_script(self, raw_text: str) -> GeneratedAssets:
        try:
            script = await self.analyzer.analyze(raw_text)
            self.script = script
            self.screen = ScreenState.GENERATING

            pipeline = AssetGenerationPipeline(self.producer, on_progress=self._observe)
            self.assets = await pipeline.run(script)
            return self.assets
        except (AnalysisError, RenderError) as e:
            # Top-level error handling
            logger.error(f"Pipeline failed with {type(e).__name__}: {e}")
            self.return_to_editor()
            raise SessionError() from e
        except Exception as e:
            logger.exception(f"Unexpected error while processing script: {e}")
            self.return_to_editor()
            raise SessionError() from e

    @property
    def is_ready(self) -> bool:
        return self.assets is not None and self.progress.is_complete

    def play(self, input_source: Optional[InputSource] = None) -> PlaybackStateMachine:
        """Start playback; requires a completed generation run."""
        if not self.is_ready or self.script is None or self.assets is None:
            raise RuntimeError("Assets are not ready; run process_script first")
        if self.player is not None:
            self.player.close()
        self.player = PlaybackStateMachine(
            self.script, self.assets, reveal_interval=self.reveal_interval
        )
        if input_source is not None:
            self.player.attach(input_source)
        self.screen = ScreenState.PLAYING
        self.player.start()
        return self.player

    def return_to_editor(self) -> None:
        if self.player is not None:
            self.player.close()
        self.player = None
        self.script = None
        self.assets = None
        self.progress = GenerationProgress(total=0, current=0, status="")
        self.screen = ScreenState.EDITOR
