"""EnglishAI utilities."""

from .prompt_loader import load_prompt, format_prompt, get_available_prompts, missing_prompts
from .json_extract import find_balanced_object, extract_json_object

__all__ = [
    "load_prompt",
    "format_prompt",
    "get_available_prompts",
    "missing_prompts",
    "find_balanced_object",
    "extract_json_object",
]
