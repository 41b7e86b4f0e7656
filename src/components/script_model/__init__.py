"""Script data model component."""

from .models import (
    EMOTIONS,
    NEUTRAL,
    THINKING,
    Character,
    CharacterDescriptor,
    GeneratedAssets,
    GenerationProgress,
    LineType,
    ParsedScript,
    Scene,
    SceneDescriptor,
    ScriptLine,
)

__all__ = [
    "EMOTIONS",
    "NEUTRAL",
    "THINKING",
    "Character",
    "CharacterDescriptor",
    "GeneratedAssets",
    "GenerationProgress",
    "LineType",
    "ParsedScript",
    "Scene",
    "SceneDescriptor",
    "ScriptLine",
]
