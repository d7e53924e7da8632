"""Static model tables shared by the request and response translators."""
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_FIELD = "content"

# Caller-facing (OpenAI) model name -> upstream (DeepSeek) model name
MODEL_ALIASES: Dict[str, str] = {
    "gpt-3.5-turbo": "deepseek-chat",
    "gpt-4": "deepseek-reasoner",
}

# Upstream model name -> message field holding the generated text
CONTENT_FIELDS: Dict[str, str] = {
    "deepseek-reasoner": "reasoning_content",
    "deepseek-chat": "content",
}


def map_model(model: str) -> str:
    """Map a caller model name to the upstream one; unknown names pass through."""
    mapped = MODEL_ALIASES.get(model, model)
    if mapped != model:
        logger.debug(f"Model mapping: {model} -> {mapped}")
    return mapped


def get_content_field(model: str) -> str:
    """Get the response message field that carries text for an upstream model."""
    return CONTENT_FIELDS.get(model, DEFAULT_CONTENT_FIELD)


def get_upstream_models() -> List[str]:
    """Get the list of upstream models advertised by /v1/models."""
    return list(CONTENT_FIELDS)
