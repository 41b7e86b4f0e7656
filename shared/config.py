"""Configuration management for the visual novel project."""

import os
from pathlib import Path
from typing import Any, Dict, List

import tomli

DEFAULT_ANALYSIS_PROMPT = """Analyze the following Visual Novel script.
1. Identify all characters and infer a brief physical description for them.
2. Identify all unique scenes/locations.
3. Parse the script into a structured list of lines.

Script:
{script_text}
"""

DEFAULT_BACKGROUND_PROMPT = (
    "Anime visual novel background art. Scene: {description}. "
    "No characters in the scene."
)

DEFAULT_PORTRAIT_PROMPT = (
    "Anime visual novel character sprite of {name}. Description: {description}. "
    "Expression: {emotion}. View: Waist-up portrait. Background: Pure white."
)


def _load_toml(path: Path) -> Dict[str, Any]:
    if path.exists():
        with open(path, "rb") as f:
            return tomli.load(f)
    return {}


class Config:
    """Centralized configuration management from config/*.toml with env override."""

    def __init__(self) -> None:
        self._file_config = _load_toml(Path("config/app.toml"))
        prompts_config = _load_toml(Path("config/prompts.toml"))

        model_cfg = self._file_config.get("model", {})
        images_cfg = self._file_config.get("images", {})
        generation_cfg = self._file_config.get("generation", {})
        playback_cfg = self._file_config.get("playback", {})

        # Script analysis model
        self.LLM_SPEC = os.environ.get("LLM_SPEC", model_cfg.get("llm_spec", None))
        self.LLM_PARAMETERS: Dict[str, Any] = model_cfg.get("parameters", {})

        # Image generation model
        self.IMAGE_MODEL = os.environ.get(
            "IMAGE_MODEL",
            images_cfg.get("model", "gemini/imagen-4.0-fast-generate-001"),
        )
        self.IMAGE_PARAMETERS: Dict[str, Any] = images_cfg.get("parameters", {})

        # Generation pipeline
        self.DEFAULT_SCENE_DESCRIPTION = os.environ.get(
            "DEFAULT_SCENE_DESCRIPTION",
            generation_cfg.get(
                "default_scene_description", "A detailed anime background scene"
            ),
        )
        self.DEFAULT_CHARACTER_DESCRIPTION = os.environ.get(
            "DEFAULT_CHARACTER_DESCRIPTION",
            generation_cfg.get("default_character_description", "Anime character"),
        )
        self.STATUS_DESCRIPTION_LIMIT = int(
            os.environ.get(
                "STATUS_DESCRIPTION_LIMIT",
                generation_cfg.get("status_description_limit", "30"),
            )
        )

        # Playback
        self.REVEAL_INTERVAL_MS = float(
            os.environ.get(
                "REVEAL_INTERVAL_MS",
                playback_cfg.get("reveal_interval_ms", "30"),
            )
        )
        self.ADVANCE_KEYS: List[str] = playback_cfg.get(
            "advance_keys", ["space", "enter", "right"]
        )

        # Prompts
        self.script_analyst = prompts_config.get("script_analyst", {})
        self.script_analyst.setdefault("analysis_prompt", DEFAULT_ANALYSIS_PROMPT)
        self.asset_producer = prompts_config.get("asset_producer", {})
        self.asset_producer.setdefault("background_prompt", DEFAULT_BACKGROUND_PROMPT)
        self.asset_producer.setdefault("portrait_prompt", DEFAULT_PORTRAIT_PROMPT)

    @property
    def REVEAL_INTERVAL_SECONDS(self) -> float:
        """Get the text reveal tick interval in seconds."""
        return self.REVEAL_INTERVAL_MS / 1000.0


# Global configuration instance
config = Config()
