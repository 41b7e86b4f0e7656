"""Unit tests for the script data model."""

import pytest
from pydantic import ValidationError
from src.components.script_model import (
    EMOTIONS,
    Character,
    GenerationProgress,
    LineType,
    ParsedScript,
    ScriptLine,
)


def test_emotion_vocabulary_order():
    assert EMOTIONS == (
        "neutral",
        "happy",
        "laughing",
        "sad",
        "angry",
        "shy",
        "speaking",
    )
    assert "thinking" not in EMOTIONS


def test_script_line_accepts_camel_case_keys():
    line = ScriptLine.model_validate(
        {
            "id": "1",
            "type": "scene_heading",
            "text": "",
            "sceneDescription": "A rooftop at dusk",
            "visualCue": "wind",
        }
    )
    assert line.type == LineType.SCENE_HEADING
    assert line.scene_description == "A rooftop at dusk"
    assert line.visual_cue == "wind"


def test_script_line_is_immutable():
    line = ScriptLine(id="1", type=LineType.NARRATION, text="Hello")
    with pytest.raises(ValidationError):
        line.text = "Changed"


def test_script_line_rejects_blank_text_except_headings():
    with pytest.raises(ValidationError):
        ScriptLine(id="1", type=LineType.DIALOGUE, speaker="Maya", text="  ")

    heading = ScriptLine(id="2", type="SCENE_HEADING", text=None)
    assert heading.text == ""


def test_display_text_for_headings_and_lines():
    heading = ScriptLine(id="1", type="SCENE_HEADING", scene_description="Cafe")
    assert heading.display_text == "Scene: Cafe"

    bare_heading = ScriptLine(id="2", type="SCENE_HEADING", text="Later that day")
    assert bare_heading.display_text == "Later that day"

    # Authored heading text wins over the scene description
    full_heading = ScriptLine(
        id="4",
        type="SCENE_HEADING",
        text="[Scene: Cafe. Morning.]",
        sceneDescription="Cafe",
    )
    assert full_heading.display_text == "[Scene: Cafe. Morning.]"

    empty_heading = ScriptLine(id="5", type="SCENE_HEADING")
    assert empty_heading.display_text == ""

    dialogue = ScriptLine(id="3", type="DIALOGUE", speaker="Liam", text="Hi.")
    assert dialogue.display_text == "Hi."


def test_numeric_ids_are_coerced_to_strings():
    script = ParsedScript.model_validate(
        {
            "lines": [{"id": 1, "type": "NARRATION", "text": "Once."}],
            "characters": [],
            "scenes": [{"id": 7, "description": "Park"}],
        }
    )
    assert script.lines[0].id == "1"
    assert script.scenes[0].id == "7"


def test_parsed_script_requires_all_collections():
    with pytest.raises(ValidationError):
        ParsedScript.model_validate({"lines": [], "characters": []})


def test_parsed_script_drops_duplicates():
    script = ParsedScript.model_validate(
        {
            "lines": [],
            "characters": [
                {"name": "Maya", "description": "Barista"},
                {"name": "Maya", "description": "Someone else"},
            ],
            "scenes": [
                {"id": "s1", "description": "Cafe"},
                {"id": "s1", "description": "Street"},
            ],
        }
    )
    assert [c.description for c in script.characters] == ["Barista"]
    assert [s.description for s in script.scenes] == ["Cafe"]


def test_missing_descriptions_become_empty():
    script = ParsedScript.model_validate(
        {
            "lines": [],
            "characters": [{"name": "Liam", "description": None}],
            "scenes": [{"id": "s1"}],
        }
    )
    assert script.characters[0].description == ""
    assert script.scenes[0].description == ""


def test_character_visuals_default_empty():
    assert Character(name="Liam").visuals == {}


def test_generation_progress_percentage_and_completion():
    assert GenerationProgress(total=0, current=0, status="").percentage == 0
    assert not GenerationProgress(total=0, current=0, status="").is_complete

    progress = GenerationProgress(total=9, current=3, status="Drawing")
    assert progress.percentage == 33
    assert not progress.is_complete
    assert GenerationProgress(total=9, current=9, status="done").is_complete
