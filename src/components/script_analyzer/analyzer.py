"""LLM-backed script analysis: raw script text -> ParsedScript."""

import json
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError
from shared.config import config
from shared.errors import AnalysisError
from shared.llm_invoker import LiteLLMInvoker
from shared.logging import get_logger

from src.components.script_model import ParsedScript

# Initialize logger
logger = get_logger(__name__)

REQUIRED_FIELDS = ("scenes", "characters", "lines")


def extract_json_object(content: str) -> Dict[str, Any]:
    """
    Pull the outermost JSON object out of a model response, ignoring any
    markdown fences or text around it.
    """
    cleaned = content.strip()
    match = re.search(r"\{.*\}", cleaned, re.DOTALL)
    if not match:
        raise json.JSONDecodeError("No JSON object found in response", cleaned, 0)
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise json.JSONDecodeError("Response is not a JSON object", cleaned, 0)
    return data


def build_parsed_script(data: Dict[str, Any]) -> ParsedScript:
    """Validate analysis output; any structural defect is an AnalysisError."""
    missing = [name for name in REQUIRED_FIELDS if data.get(name) is None]
    if missing:
        raise AnalysisError(f"Invalid script analysis result: missing {missing}")
    try:
        return ParsedScript.model_validate(data)
    except ValidationError as e:
        raise AnalysisError(
            f"Analysis result failed validation ({e.error_count()} errors)"
        ) from e


class ScriptAnalyzer:
    """Turns raw visual novel script text into structured data using an LLM."""

    def __init__(self, llm_invoker: Optional[LiteLLMInvoker] = None):
        if llm_invoker is None:
            if not config.LLM_SPEC:
                raise AnalysisError("No LLM_SPEC configured for script analysis")
            llm_invoker = LiteLLMInvoker(model=config.LLM_SPEC, **config.LLM_PARAMETERS)
        self.llm_invoker = llm_invoker

    async def analyze(self, raw_text: str) -> ParsedScript:
        if not raw_text or not raw_text.strip():
            raise AnalysisError("Script is empty")

        prompt = config.script_analyst["analysis_prompt"].format(script_text=raw_text)
        messages = [{"role": "user", "content": prompt}]

        logger.info("Analyzing script with the language model...")
        response = await self.llm_invoker.ainvoke(messages)
        if not response.content:
            raise AnalysisError("No response from the language model")
        if response.truncated:
            logger.warning("Analysis response hit the token limit and may be cut off.")

        try:
            data = extract_json_object(response.content)
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable analysis response: {response.content}")
            raise AnalysisError(f"Response was not valid JSON: {e.msg}") from e

        parsed = build_parsed_script(data)
        logger.info(
            f"Analysis found {len(parsed.lines)} lines, "
            f"{len(parsed.characters)} characters and {len(parsed.scenes)} scenes."
        )
        return parsed
