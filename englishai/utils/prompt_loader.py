"""
Prompt templates for lesson generation and grading.

Every template is a YAML mapping in englishai/prompts/ with a `user_template`
string. Lesson templates may carry per-level lookup tables (`difficulty`,
`topics`) and the grading template carries extra context strings.
"""

from pathlib import Path
from typing import Any, Iterable

import yaml


PROMPTS_DIR = Path(__file__).parent.parent / "prompts"
TEMPLATE_KEY = "user_template"


def load_prompt(name: str, prompts_dir: Path | None = None) -> dict[str, Any]:
    """
    Read and check one prompt template.

    Args:
        name: Template name without the .yaml suffix (e.g. "lesson_reading")
        prompts_dir: Directory to read from instead of the packaged prompts

    Raises:
        FileNotFoundError: No such template
        ValueError: The file is not a mapping with a `user_template` string
    """
    path = (prompts_dir or PROMPTS_DIR) / f"{name}.yaml"
    if not path.is_file():
        raise FileNotFoundError(f"Prompt template not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Prompt template {name} must be a mapping")
    if not isinstance(config.get(TEMPLATE_KEY), str):
        raise ValueError(f"Prompt template {name} has no {TEMPLATE_KEY} string")
    return config


def format_prompt(template: str, **values) -> str:
    """
    Fill a template's {placeholders}. Literal braces are written {{ and }}.

    Raises:
        ValueError: A placeholder has no value
    """
    try:
        return template.format(**values)
    except KeyError as e:
        raise ValueError(f"Missing value for placeholder {e}") from e


def get_available_prompts(prompts_dir: Path | None = None) -> list[str]:
    """Sorted template names found in the prompts directory."""
    dir_path = prompts_dir or PROMPTS_DIR
    if not dir_path.is_dir():
        return []
    return sorted(p.stem for p in dir_path.glob("*.yaml"))


def missing_prompts(names: Iterable[str], prompts_dir: Path | None = None) -> list[str]:
    """Names from `names` that have no template file."""
    available = set(get_available_prompts(prompts_dir))
    return sorted(set(names) - available)
