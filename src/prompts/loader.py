"""
Prompt templates for the vision recognizer.

Each prompt is a markdown file with YAML front matter::

    ---
    version: v2
    requires: [imei_length]
    defaults: {hint: null}
    ---
    IMEI should be {{ imei_length }} digits ...

``requires`` names variables the caller must pass; ``defaults`` fills the
optional ones so templates can test them with ``{% if %}``.
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml
from jinja2 import BaseLoader, Environment, StrictUndefined

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent

_FRONT_MATTER = re.compile(r"\A---\s*\n(.*?)\n---\s*\n?(.*)\Z", re.DOTALL)
_ENV = Environment(loader=BaseLoader(), undefined=StrictUndefined, autoescape=False)


class PromptTemplate:
    def __init__(self, prompt_id: str, content: str, metadata: Dict[str, Any]):
        self.id = prompt_id
        self.version = str(metadata.get("version", "v1"))
        self.requires = tuple(metadata.get("requires") or ())
        self.defaults = dict(metadata.get("defaults") or {})
        self._template = _ENV.from_string(content)

    def render(self, **kwargs) -> str:
        missing = [name for name in self.requires if kwargs.get(name) is None]
        if missing:
            raise ValueError(f"Prompt '{self.id}' requires {', '.join(missing)}")
        return self._template.render(**{**self.defaults, **kwargs}).strip()


def get_prompt_path(prompt_id: str) -> Path:
    return PROMPTS_DIR / f"{prompt_id}.md"


def _parse_front_matter(content: str) -> Tuple[Dict[str, Any], str]:
    match = _FRONT_MATTER.match(content)
    if not match:
        return {}, content
    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring unreadable prompt front matter: {e}")
        metadata = {}
    return metadata, match.group(2)


@lru_cache(maxsize=16)
def get_prompt(prompt_id: str) -> PromptTemplate:
    path = get_prompt_path(prompt_id)
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")

    metadata, body = _parse_front_matter(path.read_text(encoding="utf-8"))
    template = PromptTemplate(prompt_id, body, metadata)
    logger.debug(f"Loaded prompt {prompt_id} ({template.version})")
    return template


def load_prompt(prompt_id: str, **kwargs) -> str:
    return get_prompt(prompt_id).render(**kwargs)


def reload_prompts() -> None:
    get_prompt.cache_clear()
