#!/usr/bin/env python3
"""
Script -> visual novel pipeline using:
 - an LLM (via litellm) to analyze the script into scenes, characters and lines
 - an image model (via litellm) to paint backgrounds and character sprites
 - a terminal player that reveals the script line by line

Requirements / notes:
 - Set the API key your configured models need (e.g. GEMINI_API_KEY).
 - Without an LLM_SPEC the bracketed script format is parsed by rules.
"""

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import Optional, Union

from shared.config import config
from shared.errors import SessionError
from shared.logging import setup_logger
from src.components.asset_generator import LiteLLMAssetProducer, progress_logger
from src.components.player import ConsolePlayer
from src.components.script_analyzer import RuleBasedAnalyzer, ScriptAnalyzer
from src.components.script_model import ParsedScript
from src.pipeline import NovelSession

logger = logging.getLogger(__name__)


def validate_file_exists(file_path: str, file_description: str) -> bool:
    """
    Validate that a file exists.

    Args:
        file_path (str): Path to the file
        file_description (str): Description of the file for error messages

    Returns:
        bool: True if file exists, False otherwise
    """
    if not os.path.exists(file_path):
        logger.error(f"{file_description} not found: {file_path}")
        return False
    return True


def build_analyzer(rule_based: bool) -> Union[ScriptAnalyzer, RuleBasedAnalyzer]:
    if rule_based:
        return RuleBasedAnalyzer()
    if not config.LLM_SPEC:
        logger.warning("LLM not available. Falling back to the rule-based parser.")
        return RuleBasedAnalyzer()
    return ScriptAnalyzer()


def print_script(script: ParsedScript) -> None:
    print("Characters:")
    for character in script.characters:
        print(f"  - {character.name}: {character.description or '(no description)'}")
    print("Scenes:")
    for scene in script.scenes:
        print(f"  - {scene.id}: {scene.description or '(no description)'}")
    print("Lines:")
    for line in script.lines:
        speaker = f" {line.speaker}" if line.speaker else ""
        emotion = f" ({line.emotion})" if line.emotion else ""
        print(f"  [{line.type.value}{speaker}{emotion}] {line.display_text}")


async def run(
    script_path: str,
    dry_run: bool = False,
    rule_based: bool = False,
    reveal_ms: Optional[float] = None,
) -> None:
    raw_text = Path(script_path).read_text(encoding="utf-8")
    reveal_interval = reveal_ms / 1000.0 if reveal_ms is not None else None

    session = NovelSession(
        analyzer=build_analyzer(rule_based),
        producer=LiteLLMAssetProducer(),
        on_progress=progress_logger(),
        reveal_interval=reveal_interval,
    )

    if dry_run:
        logger.info("--- DRY RUN MODE: Parsed Script ---")
        print_script(await session.analyze(raw_text))
        logger.info("--- DRY RUN COMPLETE ---")
        return

    await session.process_script(raw_text)
    print(f"Generated assets ({session.progress.percentage}%). Starting playback.")
    print("Press Enter to continue, 'r' to restart, 'q' to quit.")
    player = ConsolePlayer(session.play())
    await player.run()


# ---- CLI ----
if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Turn a visual novel script into a playable visual novel."
    )
    parser.add_argument("script_path", help="Path to the script text file.")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Analyze the script and print the result without generating assets.",
    )
    parser.add_argument(
        "--rule-based",
        action="store_true",
        help="Parse the bracketed script format without calling the LLM.",
    )
    parser.add_argument(
        "--reveal-ms",
        type=float,
        help="Milliseconds between revealed characters (0 shows lines at once).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Set logging level to INFO. Useful for seeing generation progress.",
    )
    parser.add_argument(
        "--verbosity",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set a specific logging level.",
    )

    args = parser.parse_args()

    if args.verbosity != "WARNING":
        log_level = getattr(logging, args.verbosity)
    elif args.verbose:
        log_level = logging.INFO
    else:
        log_level = logging.WARNING

    setup_logger(log_level)

    if not validate_file_exists(args.script_path, "Script file"):
        exit(1)

    try:
        asyncio.run(
            run(
                args.script_path,
                dry_run=args.dry_run,
                rule_based=args.rule_based,
                reveal_ms=args.reveal_ms,
            )
        )
    except SessionError as e:
        logger.error(str(e))
        exit(1)
    except Exception as e:
        logger.error(f"Pipeline execution failed: {str(e)}")
        exit(1)
