"""
DeepSeek2OpenAI: serve the DeepSeek chat API behind an OpenAI-compatible surface.
"""

__version__ = "1.0.0"

from .config import Settings
from .exceptions import (
    GatewayError,
    AuthError,
    MalformedRequestError,
    UpstreamTransportError,
    UpstreamProtocolError,
    UpstreamReportedError,
)
from .server import create_app

__all__ = [
    "Settings",
    "GatewayError",
    "AuthError",
    "MalformedRequestError",
    "UpstreamTransportError",
    "UpstreamProtocolError",
    "UpstreamReportedError",
    "create_app",
    "__version__",
]
