"""Translate inbound OpenAI-style requests into DeepSeek requests."""
import json
from typing import Any, Dict, Optional

from .exceptions import AuthError, MalformedRequestError
from .model_mapping import map_model
from .models import TranslatedRequest, UpstreamRequest

BEARER_SCHEME = "Bearer"


def extract_credential(authorization: Optional[str]) -> str:
    """Get the credential to forward upstream from an Authorization header.

    Both "Bearer xxx" and bare "xxx" are accepted, with the scheme matched
    case-insensitively; the forwarded value always reads "Bearer xxx".
    """
    token = (authorization or "").strip()
    scheme, _, rest = token.partition(" ")
    if scheme.lower() == BEARER_SCHEME.lower():
        token = rest.strip()

    if not token:
        raise AuthError(
            "No API key found. Provide it via 'Authorization: Bearer <key>'."
        )

    return f"{BEARER_SCHEME} {token}"


def parse_body(raw: bytes) -> Dict[str, Any]:
    """Parse the inbound body; an empty body counts as an empty object."""
    if not raw or not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise MalformedRequestError("Invalid JSON body")
    if not isinstance(body, dict):
        raise MalformedRequestError("Invalid JSON body")
    return body


def translate_request(
    authorization: Optional[str],
    raw: bytes,
    default_model: str
) -> TranslatedRequest:
    """Validate an inbound request and build the upstream call for it."""
    credential = extract_credential(authorization)
    body = parse_body(raw)

    caller_model = body.get("model") or default_model
    if not isinstance(caller_model, str):
        raise MalformedRequestError("'model' must be a string")

    messages = body.get("messages")
    if messages is None:
        messages = []
    if not isinstance(messages, list):
        raise MalformedRequestError("'messages' must be an array")

    upstream = UpstreamRequest(
        model=map_model(caller_model),
        messages=messages,
        stream=bool(body.get("stream")),
    )
    return TranslatedRequest(
        credential=credential,
        caller_model=caller_model,
        upstream=upstream,
    )
