"""Typed representation of a parsed script and its generated assets."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from shared.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

# The seven expressions generated for every character, in generation order.
EMOTIONS = ("neutral", "happy", "laughing", "sad", "angry", "shy", "speaking")
NEUTRAL = "neutral"
# Playback-only emotion for THOUGHT lines; never generated.
THINKING = "thinking"


class LineType(str, Enum):
    DIALOGUE = "DIALOGUE"
    NARRATION = "NARRATION"
    THOUGHT = "THOUGHT"
    SCENE_HEADING = "SCENE_HEADING"
    ACTION = "ACTION"


class _ScriptModel(BaseModel):
    # Analysis output uses camelCase keys (sceneDescription, visualCue)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScriptLine(_ScriptModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    id: str
    type: LineType
    speaker: Optional[str] = None
    text: str = ""
    emotion: Optional[str] = None
    scene_description: Optional[str] = None
    visual_cue: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("text", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @model_validator(mode="after")
    def _check_text(self) -> "ScriptLine":
        if self.type != LineType.SCENE_HEADING and not self.text.strip():
            raise ValueError(f"line '{self.id}' of type {self.type.value} has no text")
        return self

    @property
    def display_text(self) -> str:
        """Text shown to the viewer; an empty heading shows its scene instead."""
        if self.text.strip():
            return self.text
        if self.type == LineType.SCENE_HEADING and self.scene_description:
            return f"Scene: {self.scene_description}"
        return ""


class CharacterDescriptor(_ScriptModel):
    name: str
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value


class Character(CharacterDescriptor):
    # emotion key -> image handle; sparse when some emotions failed to render
    visuals: Dict[str, str] = Field(default_factory=dict)


class SceneDescriptor(_ScriptModel):
    id: str
    description: str = ""

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class Scene(SceneDescriptor):
    image: str


class ParsedScript(_ScriptModel):
    """
    Structured output of the script analysis step.

    All three collections are required. Duplicate character names and scene
    ids are dropped, keeping the first occurrence.
    """

    lines: List[ScriptLine]
    characters: List[CharacterDescriptor]
    scenes: List[SceneDescriptor]

    @field_validator("characters")
    @classmethod
    def _unique_characters(
        cls, characters: List[CharacterDescriptor]
    ) -> List[CharacterDescriptor]:
        seen: Set[str] = set()
        unique = []
        for character in characters:
            if character.name in seen:
                logger.warning(
                    f"Duplicate character '{character.name}' dropped from analysis."
                )
                continue
            seen.add(character.name)
            unique.append(character)
        return unique

    @field_validator("scenes")
    @classmethod
    def _unique_scenes(cls, scenes: List[SceneDescriptor]) -> List[SceneDescriptor]:
        seen: Set[str] = set()
        unique = []
        for scene in scenes:
            if scene.id in seen:
                logger.warning(f"Duplicate scene '{scene.id}' dropped from analysis.")
                continue
            seen.add(scene.id)
            unique.append(scene)
        return unique


@dataclass(frozen=True)
class GenerationProgress:
    """Immutable snapshot of the generation pipeline's progress."""

    total: int
    current: int
    status: str

    @property
    def percentage(self) -> int:
        if self.total <= 0:
            return 0
        return round(self.current / self.total * 100)

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.current == self.total


class GeneratedAssets(BaseModel):
    scenes: List[Scene] = Field(default_factory=list)
    characters: List[Character] = Field(default_factory=list)
