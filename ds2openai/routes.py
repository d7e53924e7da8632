"""API routes for OpenAI-compatible endpoints."""
import logging
from typing import AsyncIterator, Optional

import httpx
from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse
from starlette.background import BackgroundTask

from . import __version__
from .config import Settings
from .deepseek_client import DeepSeekClient
from .model_mapping import get_upstream_models
from .models import (
    EXTENSION_FIELDS,
    ModelInfo,
    ModelListResponse,
    TranslatedRequest,
)
from .relay import (
    build_completion_response,
    check_upstream_body,
    relay_stream,
    stream_error_body,
)
from .translator import translate_request

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_client(request: Request) -> DeepSeekClient:
    return request.app.state.deepseek_client


@router.get("/v1/models")
async def list_models():
    """List available models."""
    models = [ModelInfo(id=model_id) for model_id in get_upstream_models()]
    return ModelListResponse(data=models)


@router.post("/v1/chat/completions")
async def chat_completions(
    request: Request,
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    client: DeepSeekClient = Depends(get_client),
):
    """Create chat completion."""
    translated = translate_request(
        authorization,
        await request.body(),
        settings.default_model
    )

    if translated.upstream.stream:
        return await stream_chat_completion(translated, client, settings)
    else:
        return await non_stream_chat_completion(translated, client, settings)


async def stream_chat_completion(
    translated: TranslatedRequest,
    client: DeepSeekClient,
    settings: Settings
):
    """Handle streaming chat completion."""
    response = await client.chat_completion_stream(
        translated.upstream,
        translated.credential
    )

    if not response.is_success:
        error_body = await client.read_error_body(response)
        logger.warning(f"DeepSeek streaming error (HTTP {response.status_code})")
        return JSONResponse(
            status_code=response.status_code,
            content=stream_error_body(response.status_code, error_body)
        )

    # Bytes are written as-is, so upstream lines keep their own "data:" prefix
    return EventSourceResponse(
        stream_frames(response),
        headers={"Cache-Control": "no-cache"},
        ping=settings.sse_ping_interval,
        background=BackgroundTask(response.aclose),
    )


async def stream_frames(response: httpx.Response) -> AsyncIterator[bytes]:
    """Relay an open upstream stream as encoded SSE frames, closing it on exit."""
    try:
        async for frame in relay_stream(response.aiter_bytes()):
            yield frame.encode("utf-8")
    finally:
        await response.aclose()


async def non_stream_chat_completion(
    translated: TranslatedRequest,
    client: DeepSeekClient,
    settings: Settings
):
    """Handle non-streaming chat completion."""
    response = await client.chat_completion(
        translated.upstream,
        translated.credential
    )

    if settings.raw_response:
        return JSONResponse(content=check_upstream_body(response.status_code, response.content))

    completion = build_completion_response(
        response.status_code,
        response.content,
        caller_model=translated.caller_model,
        upstream_model=translated.upstream.model,
    )
    exclude = None if settings.openai_extensions else EXTENSION_FIELDS
    return JSONResponse(content=completion.model_dump(exclude=exclude))


@router.get("/health")
async def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
        "upstream": settings.deepseek_base_url,
    }
