"""Pure lookups from playback state to scenes and images."""

from typing import Optional, Sequence

from src.components.script_model import NEUTRAL, Character, Scene


def resolve_background(
    scenes: Sequence[Scene], scene_id: Optional[str] = None
) -> Optional[str]:
    """Image of the scene with ``scene_id``, else the first scene's image."""
    for scene in scenes:
        if scene_id is not None and scene.id == scene_id:
            return scene.image
    return scenes[0].image if scenes else None


def find_character(characters: Sequence[Character], name: str) -> Optional[Character]:
    wanted = name.lower()
    for character in characters:
        if character.name.lower() == wanted:
            return character
    return None


def resolve_character_image(
    characters: Sequence[Character], name: str, emotion: str
) -> Optional[str]:
    """
    Portrait for ``name`` showing ``emotion``.

    Name matching is case-insensitive. A missing emotion (including the
    synthetic "thinking") falls back to the neutral portrait; an unknown
    character resolves to None.
    """
    character = find_character(characters, name)
    if character is None:
        return None
    return character.visuals.get(emotion) or character.visuals.get(NEUTRAL)


def match_heading_scene(
    scenes: Sequence[Scene], scene_description: Optional[str]
) -> Optional[Scene]:
    """First scene whose description contains the heading's description."""
    if not scene_description:
        return None
    for scene in scenes:
        if scene_description in scene.description:
            return scene
    return None


def match_exact_scene(
    scenes: Sequence[Scene], scene_description: Optional[str]
) -> Optional[Scene]:
    """First scene whose description equals the line's scene description."""
    if not scene_description:
        return None
    for scene in scenes:
        if scene.description == scene_description:
            return scene
    return None
