"""Script analysis component."""

from .analyzer import ScriptAnalyzer, build_parsed_script, extract_json_object
from .rule_based import RuleBasedAnalyzer, build_script, parse_bracketed_script

__all__ = [
    "ScriptAnalyzer",
    "RuleBasedAnalyzer",
    "build_parsed_script",
    "build_script",
    "extract_json_object",
    "parse_bracketed_script",
]
