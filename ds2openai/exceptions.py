"""
Gateway exceptions and their HTTP error payloads
"""

from typing import Any, Dict, Optional

from .models import ErrorDetail, ErrorResponse


class GatewayError(Exception):
    """Base error; carries the HTTP status and OpenAI error type to report"""

    status_code = 500
    error_type = "api_error"

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        error = ErrorDetail(message=self.message, type=self.error_type)
        return ErrorResponse(error=error).model_dump()


class AuthError(GatewayError):
    """No credential on the inbound request"""

    status_code = 401
    error_type = "invalid_request_error"


class MalformedRequestError(GatewayError):
    """Inbound body is not a JSON object"""

    status_code = 400
    error_type = "invalid_request_error"


class UpstreamTransportError(GatewayError):
    """The upstream could not be reached"""

    status_code = 502


class UpstreamProtocolError(GatewayError):
    """The upstream answered with something other than a JSON object"""

    status_code = 502


class UpstreamReportedError(GatewayError):
    """The upstream returned a structured error; its body is relayed verbatim"""

    def __init__(self, status_code: int, body: Any):
        self.body = body
        message = "Unknown error calling DeepSeek"
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            message = body["error"].get("message") or message
        super().__init__(message, status_code)

    def to_response(self) -> Any:
        if self.body is None:
            return super().to_response()
        return self.body
