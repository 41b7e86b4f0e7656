"""
Sequential asset generation: one background per scene, one portrait per
character emotion, with a progress snapshot after every unit of work.
"""

from dataclasses import replace
import logging
from typing import Callable, Dict, List, Optional

from shared.config import config
from shared.logging import get_logger

from src.components.asset_generator.producer import AssetProducer
from src.components.script_model import (
    EMOTIONS,
    Character,
    GeneratedAssets,
    GenerationProgress,
    ParsedScript,
    Scene,
)

# Initialize logger
logger = get_logger(__name__)

INITIAL_STATUS = "Initializing Creative Engine..."
FINAL_STATUS = "Finalizing game assets..."

ProgressObserver = Callable[[GenerationProgress], None]


def progress_logger(
    name: str = "progress", level: int = logging.INFO
) -> ProgressObserver:
    """Observer that logs each snapshot as `[current/total] status`."""
    target = get_logger(name)

    def observe(progress: GenerationProgress) -> None:
        target.log(level, f"[{progress.current}/{progress.total}] {progress.status}")

    return observe


def count_tasks(script: ParsedScript) -> int:
    """Units of work for a run: one per scene plus one per character emotion."""
    return len(script.scenes) + len(script.characters) * len(EMOTIONS)


class AssetGenerationPipeline:
    """
    Fills a parsed script with generated images.

    Producer calls are issued strictly one at a time so progress is monotonic
    and the status text always names the asset in flight. A failed portrait
    leaves a gap in that character's visuals; a failed background fails the run.
    """

    def __init__(
        self,
        producer: AssetProducer,
        on_progress: Optional[ProgressObserver] = None,
    ):
        self.producer = producer
        self.on_progress = on_progress
        self.progress = GenerationProgress(total=0, current=0, status="")

    def _publish(self, **changes) -> None:
        self.progress = replace(self.progress, **changes)
        if self.on_progress is not None:
            self.on_progress(self.progress)

    def _advance(self) -> None:
        self._publish(current=self.progress.current + 1)

    async def run(self, script: ParsedScript) -> GeneratedAssets:
        # The total is fixed up front and never revised, even on failures
        self.progress = GenerationProgress(total=0, current=0, status="")
        self._publish(total=count_tasks(script), current=0, status=INITIAL_STATUS)
        logger.info(
            f"Generating {self.progress.total} assets for {len(script.scenes)} "
            f"scenes and {len(script.characters)} characters."
        )

        scenes = await self._generate_scenes(script)
        characters = await self._generate_characters(script)

        self._publish(status=FINAL_STATUS)
        logger.info("Asset generation complete.")
        return GeneratedAssets(scenes=scenes, characters=characters)

    async def _generate_scenes(self, script: ParsedScript) -> List[Scene]:
        scenes: List[Scene] = []
        limit = config.STATUS_DESCRIPTION_LIMIT
        for scene in script.scenes:
            description = scene.description or config.DEFAULT_SCENE_DESCRIPTION
            self._publish(status=f"Painting background: {description[:limit]}...")
            try:
                image = await self.producer.render_background(description)
            except Exception as e:
                logger.error(f"Background for scene '{scene.id}' failed: {e}")
                raise
            scenes.append(Scene(id=scene.id, description=description, image=image))
            self._advance()
        return scenes

    async def _generate_characters(self, script: ParsedScript) -> List[Character]:
        characters: List[Character] = []
        for character in script.characters:
            description = character.description or config.DEFAULT_CHARACTER_DESCRIPTION
            visuals: Dict[str, str] = {}
            for emotion in EMOTIONS:
                self._publish(status=f"Drawing {character.name} ({emotion})...")
                try:
                    visuals[emotion] = await self.producer.render_portrait(
                        character.name, description, emotion
                    )
                except Exception as e:
                    logger.warning(
                        f"Failed to generate {character.name} ({emotion}); "
                        f"continuing without it: {e}"
                    )
                self._advance()
            characters.append(
                Character(name=character.name, description=description, visuals=visuals)
            )
        return characters
