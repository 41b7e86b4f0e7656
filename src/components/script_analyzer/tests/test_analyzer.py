"""Unit tests for the LLM-backed script analyzer."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from shared.errors import AnalysisError
from shared.llm_invoker import LLMResponse
from src.components.script_analyzer.analyzer import (
    ScriptAnalyzer,
    build_parsed_script,
    extract_json_object,
)
from src.components.script_model import LineType

ANALYSIS = {
    "characters": [{"name": "Maya", "description": "Barista with a green apron"}],
    "scenes": [{"id": "cafe", "description": "Bean & Leaf coffee shop, morning"}],
    "lines": [
        {
            "id": "1",
            "type": "SCENE_HEADING",
            "text": "",
            "sceneDescription": "Bean & Leaf coffee shop",
        },
        {
            "id": "2",
            "type": "DIALOGUE",
            "speaker": "Maya",
            "text": "Well, look who finally woke up.",
            "emotion": "happy",
        },
    ],
}


@pytest.fixture
def mock_llm_invoker():
    invoker = MagicMock()
    invoker.ainvoke = AsyncMock()
    return invoker


def test_extract_json_object_from_fenced_response():
    content = "Here you go:\n```json\n" + json.dumps(ANALYSIS) + "\n```"
    assert extract_json_object(content) == ANALYSIS


def test_extract_json_object_without_json():
    with pytest.raises(json.JSONDecodeError):
        extract_json_object("I could not parse that script.")


def test_build_parsed_script_missing_fields_is_fatal():
    with pytest.raises(AnalysisError) as exc_info:
        build_parsed_script({"lines": []})
    assert "scenes" in exc_info.value.detail
    assert "characters" in exc_info.value.detail


def test_build_parsed_script_schema_violation():
    bad = dict(ANALYSIS, lines=[{"id": "1", "type": "MONOLOGUE", "text": "Hm."}])
    with pytest.raises(AnalysisError):
        build_parsed_script(bad)


def test_analyze_success(mock_llm_invoker):
    mock_llm_invoker.ainvoke.return_value = LLMResponse(content=json.dumps(ANALYSIS))
    analyzer = ScriptAnalyzer(mock_llm_invoker)

    script = asyncio.run(analyzer.analyze("[Maya] Well, look who finally woke up."))

    assert [c.name for c in script.characters] == ["Maya"]
    assert script.lines[0].type == LineType.SCENE_HEADING
    assert script.lines[1].emotion == "happy"

    messages = mock_llm_invoker.ainvoke.call_args[0][0]
    assert len(messages) == 1
    assert messages[0]["role"] == "user"
    assert "[Maya] Well, look who finally woke up." in messages[0]["content"]


def test_analyze_empty_response(mock_llm_invoker):
    mock_llm_invoker.ainvoke.return_value = LLMResponse(content="")
    analyzer = ScriptAnalyzer(mock_llm_invoker)

    with pytest.raises(AnalysisError):
        asyncio.run(analyzer.analyze("[Narrator] Hello."))


def test_analyze_non_json_response(mock_llm_invoker):
    mock_llm_invoker.ainvoke.return_value = LLMResponse(content="Sorry, no.")
    analyzer = ScriptAnalyzer(mock_llm_invoker)

    with pytest.raises(AnalysisError):
        asyncio.run(analyzer.analyze("[Narrator] Hello."))


def test_analyze_blank_script_skips_llm(mock_llm_invoker):
    analyzer = ScriptAnalyzer(mock_llm_invoker)

    with pytest.raises(AnalysisError):
        asyncio.run(analyzer.analyze("   \n"))
    mock_llm_invoker.ainvoke.assert_not_called()


@patch("src.components.script_analyzer.analyzer.config")
def test_analyzer_requires_llm_spec(mock_config):
    mock_config.LLM_SPEC = None
    with pytest.raises(AnalysisError):
        ScriptAnalyzer()


def test_analyze_through_litellm():
    """The default invoker goes through litellm.acompletion."""
    mock_choice = MagicMock()
    mock_choice.message.content = json.dumps(ANALYSIS)
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]

    with patch(
        "litellm.acompletion", new=AsyncMock(return_value=mock_response)
    ) as mock_completion, patch(
        "src.components.script_analyzer.analyzer.config"
    ) as mock_config:
        mock_config.LLM_SPEC = "gemini/test-model"
        mock_config.LLM_PARAMETERS = {"temperature": 0.1}
        mock_config.script_analyst = {"analysis_prompt": "Script:\n{script_text}"}

        script = asyncio.run(ScriptAnalyzer().analyze("[Maya] Hi."))

    assert len(script.lines) == 2
    call_kwargs = mock_completion.call_args.kwargs
    assert call_kwargs["model"] == "gemini/test-model"
    assert call_kwargs["temperature"] == 0.1
    assert call_kwargs["messages"][0]["content"] == "Script:\n[Maya] Hi."


def test_analyze_response_without_choices_is_analysis_error():
    """A completion with no choices is reported as a failed analysis."""
    with patch(
        "litellm.acompletion", new=AsyncMock(return_value=MagicMock(choices=[]))
    ), patch("src.components.script_analyzer.analyzer.config") as mock_config:
        mock_config.LLM_SPEC = "gemini/test-model"
        mock_config.LLM_PARAMETERS = {}
        mock_config.script_analyst = {"analysis_prompt": "Script:\n{script_text}"}

        with pytest.raises(AnalysisError):
            asyncio.run(ScriptAnalyzer().analyze("[Maya] Hi."))
