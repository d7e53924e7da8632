"""Relay DeepSeek responses back to OpenAI-style callers.

Buffered responses are parsed and reshaped into a ``chat.completion``
object. Streamed responses are passed through line by line and re-framed as
server-sent events, with a carry buffer for lines that straddle network
chunks.
"""
import codecs
import json
import logging
import time
import uuid
from typing import Any, AsyncIterable, AsyncIterator, Dict, List, Optional, Union

from .exceptions import UpstreamProtocolError, UpstreamReportedError
from .model_mapping import DEFAULT_CONTENT_FIELD, get_content_field
from .models import ChatCompletionResponse, Choice, CompletionMessage, Usage

logger = logging.getLogger(__name__)

CONTENT_SENTINEL = "DUMMY"
DONE_FRAME = "data: [DONE]\n\n"
USAGE_FIELDS = ("prompt_tokens", "completion_tokens", "total_tokens")


def generate_response_id() -> str:
    """Time-ordered id, unique within the process."""
    return f"gen-{int(time.time() * 1000)}-{uuid.uuid4()}"


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def check_upstream_body(status_code: int, body: bytes) -> Dict[str, Any]:
    """Parse a buffered upstream body, raising for anything but a success object."""
    try:
        payload = json.loads(body)
    except ValueError:
        raise UpstreamProtocolError("Failed to parse JSON from DeepSeek")
    if not isinstance(payload, dict):
        raise UpstreamProtocolError("Failed to parse JSON from DeepSeek")

    if not _is_success(status_code) or payload.get("error") is not None:
        status = status_code if not _is_success(status_code) else 400
        logger.warning(f"DeepSeek returned an error (HTTP {status_code}): {payload}")
        raise UpstreamReportedError(status, payload)

    return payload


def _select_content(message: Dict[str, Any], content_field: str) -> Any:
    for key in (content_field, DEFAULT_CONTENT_FIELD):
        value = message.get(key)
        if value is not None:
            return value
    return CONTENT_SENTINEL


def _default_zero(value: Any) -> Any:
    return 0 if value is None else value


def reshape_completion(
    payload: Dict[str, Any],
    caller_model: str,
    upstream_model: str
) -> ChatCompletionResponse:
    """Build the OpenAI-shaped response from a DeepSeek success payload.

    Choice and usage values are copied as DeepSeek sent them; only their
    containers have to be JSON objects and arrays.
    """
    content_field = get_content_field(upstream_model)

    upstream_choices = payload.get("choices") or []
    usage = payload.get("usage") or {}
    if not isinstance(upstream_choices, list) or not isinstance(usage, dict):
        raise UpstreamProtocolError("Unexpected response shape from DeepSeek")

    choices = []
    for position, choice in enumerate(upstream_choices):
        message = choice.get("message") if isinstance(choice, dict) else None
        if not isinstance(choice, dict) or not isinstance(message, (dict, type(None))):
            raise UpstreamProtocolError("Unexpected response shape from DeepSeek")
        message = message or {}
        choices.append(
            Choice(
                index=choice.get("index", position),
                message=CompletionMessage(
                    role=message.get("role"),
                    content=_select_content(message, content_field),
                ),
                finish_reason=choice.get("finish_reason"),
            )
        )

    return ChatCompletionResponse(
        id=generate_response_id(),
        created=int(time.time()),
        model=caller_model,
        choices=choices,
        usage=Usage(**{name: _default_zero(usage.get(name)) for name in USAGE_FIELDS}),
        system_fingerprint=f"fp_{uuid.uuid4()}",
    )


def build_completion_response(
    status_code: int,
    body: bytes,
    caller_model: str,
    upstream_model: str
) -> ChatCompletionResponse:
    """Check and reshape a buffered upstream response."""
    payload = check_upstream_body(status_code, body)
    return reshape_completion(payload, caller_model, upstream_model)


def stream_error_body(status_code: int, body: bytes) -> Any:
    """Error payload for an upstream stream that failed before sending data."""
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if payload is None:
        payload = {
            "error": {
                "message": f"DeepSeek streaming error (HTTP {status_code})",
                "type": "api_error",
            }
        }
    return payload


class SseReframer:
    """Reassemble upstream lines across chunks and emit one SSE frame per line."""

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._carry = ""

    def feed(self, chunk: Union[bytes, str]) -> List[str]:
        """Consume a chunk, returning frames for every line it completes."""
        text = self._decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
        lines = (self._carry + text).split("\n")
        self._carry = lines.pop()

        frames = []
        for line in lines:
            line = line.strip()
            if line:
                frames.append(f"{line}\n\n")
        return frames

    def finish(self) -> List[str]:
        """Flush the carry buffer and close the stream with the [DONE] frame."""
        tail = (self._carry + self._decoder.decode(b"", final=True)).strip()
        self._carry = ""

        frames = []
        if tail:
            if not tail.startswith("data:"):
                tail = f"data: {tail}"
            frames.append(f"{tail}\n\n")
        frames.append(DONE_FRAME)
        return frames


async def relay_stream(
    chunks: AsyncIterable[bytes],
    reframer: Optional[SseReframer] = None
) -> AsyncIterator[str]:
    """Re-frame an upstream byte stream as SSE frames ending with [DONE].

    Read errors end the stream early instead of propagating; the caller only
    sees a shorter stream.
    """
    reframer = reframer or SseReframer()
    try:
        async for chunk in chunks:
            for frame in reframer.feed(chunk):
                yield frame
    except Exception:
        logger.exception("Stream error from DeepSeek")

    for frame in reframer.finish():
        yield frame
