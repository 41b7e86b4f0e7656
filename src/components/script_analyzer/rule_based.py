"""Offline analysis of the bracketed script format, for use without an LLM."""

import re
from typing import Dict, List, Optional

from shared.errors import AnalysisError
from shared.logging import get_logger

from src.components.script_model import (
    EMOTIONS,
    NEUTRAL,
    CharacterDescriptor,
    LineType,
    ParsedScript,
    SceneDescriptor,
    ScriptLine,
)

# Initialize logger
logger = get_logger(__name__)

SCENE_RE = re.compile(r"^\[\s*scene\s*:\s*(.*?)\s*\]\s*$", re.IGNORECASE)
# [Name] rest-of-line
TAGGED_RE = re.compile(r"^\[\s*([^\]:]+?)\s*\]\s*(.*)$")
# (Thinking) / (happy) directly after the speaker tag
PAREN_RE = re.compile(r"^\(\s*([A-Za-z ]+?)\s*\)\s*(.*)$")
ACTION_PREFIXES = ("sprite of", "action")
NARRATOR = "narrator"


def parse_bracketed_script(raw_text: str) -> List[Dict[str, Optional[str]]]:
    """
    Parse bracketed visual novel script text into line dictionaries.

    Supported line formats:
    1. [Scene: description]        -> SCENE_HEADING
    2. [Narrator] text             -> NARRATION; a bare tag takes the
                                      untagged text that follows it
    3. [Name] (Thinking) text      -> THOUGHT
    4. [Name] (emotion) text       -> DIALOGUE with an explicit emotion
    5. [Name] text                 -> DIALOGUE, neutral
    6. [Sprite of ...] / [Action]  -> ACTION, kept as a visual cue
    7. bare text                   -> continuation of the previous line, or
                                      NARRATION if nothing precedes it

    Args:
        raw_text (str): The script text.

    Returns:
        List[Dict]: One dictionary per line with ScriptLine field names.
    """
    parsed: List[Dict[str, Optional[str]]] = []

    for line_number, line in enumerate(raw_text.splitlines(), start=1):
        ln = line.strip()
        if not ln:
            continue
        logger.debug(f"Processing line {line_number}: '{ln}'")

        m = SCENE_RE.match(ln)
        if m:
            parsed.append(
                {"type": LineType.SCENE_HEADING.value, "scene_description": m.group(1)}
            )
            continue

        m = TAGGED_RE.match(ln)
        if m:
            tag, rest = m.group(1), m.group(2).strip()
            if tag.lower() == NARRATOR:
                # An empty tag waits for the untagged lines that follow it
                parsed.append({"type": LineType.NARRATION.value, "text": rest})
                continue
            if not rest or tag.lower().startswith(ACTION_PREFIXES):
                # A bracket with nothing after it is stage direction
                cue = ln.strip("[] ")
                parsed.append(
                    {"type": LineType.ACTION.value, "text": cue, "visual_cue": cue}
                )
                continue

            emotion = NEUTRAL
            line_type = LineType.DIALOGUE
            paren = PAREN_RE.match(rest)
            if paren:
                marker = paren.group(1).lower()
                if marker == "thinking":
                    line_type = LineType.THOUGHT
                    emotion = None
                    rest = paren.group(2)
                elif marker in EMOTIONS:
                    emotion = marker
                    rest = paren.group(2)
            parsed.append(
                {
                    "type": line_type.value,
                    "speaker": tag,
                    "text": rest,
                    "emotion": emotion,
                }
            )
            continue

        # fallback: continuation of the previous line, else narration
        if parsed and parsed[-1]["type"] != LineType.SCENE_HEADING.value:
            parsed[-1]["text"] = f"{parsed[-1]['text']} {ln}".strip()
        else:
            parsed.append({"type": LineType.NARRATION.value, "text": ln})

    kept = [
        entry
        for entry in parsed
        if entry["type"] != LineType.NARRATION.value or entry["text"]
    ]
    if len(kept) < len(parsed):
        logger.debug(f"Dropped {len(parsed) - len(kept)} empty narrator tag(s)")
    parsed = kept

    logger.info(f"Successfully parsed {len(parsed)} lines from bracketed script")
    return parsed


def build_script(parsed: List[Dict[str, Optional[str]]]) -> ParsedScript:
    """Assemble parsed line dictionaries into a ParsedScript."""
    lines: List[ScriptLine] = []
    characters: Dict[str, CharacterDescriptor] = {}
    scenes: Dict[str, SceneDescriptor] = {}

    for index, entry in enumerate(parsed, start=1):
        scene_description = entry.get("scene_description")
        if scene_description and scene_description not in scenes:
            scenes[scene_description] = SceneDescriptor(
                id=f"scene_{len(scenes) + 1}", description=scene_description
            )
        speaker = entry.get("speaker")
        if speaker and speaker not in characters:
            characters[speaker] = CharacterDescriptor(name=speaker)
        lines.append(ScriptLine(id=f"line_{index}", **entry))

    return ParsedScript(
        lines=lines,
        characters=list(characters.values()),
        scenes=list(scenes.values()),
    )


class RuleBasedAnalyzer:
    """Analyzer with the same contract as ScriptAnalyzer that needs no model."""

    async def analyze(self, raw_text: str) -> ParsedScript:
        if not raw_text or not raw_text.strip():
            raise AnalysisError("Script is empty")
        try:
            return build_script(parse_bracketed_script(raw_text))
        except ValueError as e:
            raise AnalysisError(f"Failed to parse script: {e}") from e
