"""Data models for the OpenAI-facing and DeepSeek-facing payloads."""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field
import time


class UpstreamRequest(BaseModel):
    """DeepSeek chat completion request."""
    model: str
    messages: List[Any] = Field(default_factory=list)
    stream: bool = False


class TranslatedRequest(BaseModel):
    """Inbound request after credential extraction and model mapping."""
    credential: str
    caller_model: str
    upstream: UpstreamRequest


class CompletionMessage(BaseModel):
    """Assistant message in a reshaped choice."""
    role: Any = None
    content: Any = None
    refusal: Optional[str] = None


class Choice(BaseModel):
    """Chat completion choice."""
    index: Any = 0
    message: CompletionMessage
    logprobs: Optional[Dict[str, Any]] = None
    finish_reason: Any = None


class PromptTokensDetails(BaseModel):
    cached_tokens: int = 0
    audio_tokens: int = 0


class CompletionTokensDetails(BaseModel):
    reasoning_tokens: int = 0
    audio_tokens: int = 0
    accepted_prediction_tokens: int = 0
    rejected_prediction_tokens: int = 0


class Usage(BaseModel):
    """Token usage statistics, copied from upstream as-is."""
    prompt_tokens: Any = 0
    completion_tokens: Any = 0
    total_tokens: Any = 0
    prompt_tokens_details: PromptTokensDetails = Field(default_factory=PromptTokensDetails)
    completion_tokens_details: CompletionTokensDetails = Field(default_factory=CompletionTokensDetails)


class ChatCompletionResponse(BaseModel):
    """OpenAI chat completion response."""
    id: str
    object: str = "chat.completion"
    created: int = Field(default_factory=lambda: int(time.time()))
    model: str
    choices: List[Choice]
    usage: Usage = Field(default_factory=Usage)
    service_tier: str = "default"
    system_fingerprint: Optional[str] = None


# Fields only OpenAI-strict clients look at; dropped when extensions are off.
EXTENSION_FIELDS: Dict[str, Any] = {
    "service_tier": True,
    "system_fingerprint": True,
    "usage": {"prompt_tokens_details": True, "completion_tokens_details": True},
    "choices": {"__all__": {"logprobs": True, "message": {"refusal": True}}},
}


class ModelInfo(BaseModel):
    """Model information."""
    id: str
    object: str = "model"
    created: int = Field(default_factory=lambda: int(time.time()))
    owned_by: str = "deepseek"


class ModelListResponse(BaseModel):
    """Model list response."""
    object: str = "list"
    data: List[ModelInfo]


class ErrorDetail(BaseModel):
    """Error detail."""
    message: str
    type: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: ErrorDetail
