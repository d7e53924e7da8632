"""DeepSeek2OpenAI - Serve the DeepSeek API as an OpenAI-compatible API."""
import argparse
import os

import uvicorn

from ds2openai import __version__, create_app
from ds2openai.config import Settings, settings
from ds2openai.logging_config import setup_logging

_app = None


def __getattr__(name):
    """Build ``main.app`` on first access, from the current environment."""
    global _app
    if name != "app":
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
    if _app is None:
        app_settings = Settings()
        setup_logging(app_settings.log_level)
        _app = create_app(app_settings)
    return _app


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line overrides for the environment settings."""
    parser = argparse.ArgumentParser(description="OpenAI-compatible gateway for DeepSeek")
    parser.add_argument("--host", help="Bind address")
    parser.add_argument("-p", "--port", type=int, help="Server port")
    parser.add_argument("-u", "--base-url", dest="deepseek_base_url", help="DeepSeek API base URL")
    parser.add_argument("-m", "--model", dest="default_model", help="Fallback model name")
    parser.add_argument(
        "-r", "--raw-response",
        action="store_true",
        default=None,
        help="Return DeepSeek JSON bodies without reshaping"
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Apply command-line overrides on top of the environment settings."""
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    if not overrides:
        return settings
    return settings.model_copy(update=overrides)


def export_overrides(args: argparse.Namespace, environ=os.environ) -> None:
    """Publish command-line overrides as environment variables.

    uvicorn imports ``main:app`` itself (again in every reload worker), so the
    overrides have to reach it through the environment.
    """
    for key, value in vars(args).items():
        if value is not None:
            environ[key.upper()] = str(value)


if __name__ == "__main__":
    args = parse_args()
    export_overrides(args)
    cli_settings = load_settings(args)

    print(f"""
╔═══════════════════════════════════════════════════════════╗
║                 DeepSeek2OpenAI v{__version__}                    ║
║           DeepSeek API → OpenAI Compatible API            ║
╠═══════════════════════════════════════════════════════════╣
║  服务地址: http://{cli_settings.host}:{cli_settings.port}
║  上游地址: {cli_settings.get_completions_url()}
║  默认模型: {cli_settings.default_model}
╚═══════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "main:app",
        host=cli_settings.host,
        port=cli_settings.port,
        log_level=cli_settings.log_level.lower(),
        reload=cli_settings.debug
    )
