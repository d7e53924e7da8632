"""
Logging configuration matching uvicorn's console output
"""

import logging
import sys
from typing import Optional

# httpx logs every upstream request at INFO; the gateway logs its own line
QUIET_LOGGERS = ("httpx", "httpcore")


class GatewayFormatter(logging.Formatter):
    """Pads level names like uvicorn ("INFO:     ") and colors them on a TTY"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",      # cyan
        logging.INFO: "\033[32m",       # green
        logging.WARNING: "\033[33m",    # yellow
        logging.ERROR: "\033[31m",      # red
        logging.CRITICAL: "\033[35m",   # magenta
    }
    RESET = "\033[0m"

    def __init__(self, fmt: str = "%(levelprefix)s %(name)s - %(message)s",
                 use_colors: Optional[bool] = None):
        super().__init__(fmt)
        if use_colors is None:
            use_colors = sys.stderr.isatty()
        self.use_colors = use_colors

    def levelprefix(self, record: logging.LogRecord) -> str:
        prefix = f"{record.levelname}:".ljust(9)
        color = self.LEVEL_COLORS.get(record.levelno)
        if self.use_colors and color:
            prefix = prefix.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return prefix

    def formatMessage(self, record: logging.LogRecord) -> str:
        values = dict(record.__dict__, levelprefix=self.levelprefix(record))
        return self._style._fmt % values


def setup_logging(level: str = "INFO", use_colors: Optional[bool] = None) -> None:
    """Route the root logger through a single uvicorn-style handler"""
    handler = logging.StreamHandler()
    handler.setFormatter(GatewayFormatter(use_colors=use_colors))
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
