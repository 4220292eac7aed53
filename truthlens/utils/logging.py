"""
Structured Logging

Every log line is a JSON object with the same queryable fields:
ts, level, module, action, msg, plus arbitrary context.

EXAMPLE QUERIES (Loki / jq)
===========================
# All errors
{service="truthlens"} | json | level="ERROR"

# Extraction failures with the raw model text
{service="truthlens"} | json | module="llm.parser" action="extract_failed"

# Feed fetches that produced nothing
{service="truthlens"} | json | module="feed" action="feed_skipped"

# Model latency per stage
{service="truthlens"} | json | action="llm_response"

USAGE
=====
from truthlens.utils.logging import log, get_logger, configure_logging

logger = get_logger()
log.info(logger, "verify", "start", "Verifying claim", claim=claim[:80])
log.error(logger, "verify", "invoke_failed", "Provider call failed",
          error=str(e), error_type=type(e).__name__)

ACTION NAMING
=============
  *_start     beginning of an operation
  *_done      successful completion
  *_failed    error/failure
  *_skipped   intentionally skipped
  *_fallback  falling back to defaults
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

SERVICE = "truthlens"


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


class StructuredFormatter(logging.Formatter):
    """JSON formatter. Records not emitted through StructuredLogger are wrapped too."""

    def __init__(self, pretty: bool = False):
        super().__init__()
        self.pretty = pretty

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()

        if getattr(record, "_structured", False):
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record._module,
                "action": record._action,
                "msg": msg,
            }
            for key, value in record._extra.items():
                if value is not None:
                    data[key] = value
        else:
            data = {
                "ts": _timestamp(),
                "level": record.levelname,
                "module": record.name,
                "action": "log",
                "msg": msg,
            }

        if record.exc_info:
            data["exc"] = self.formatException(record.exc_info)

        if self.pretty:
            return self._pretty(data)
        return json.dumps(data, default=str, separators=(",", ":"))

    def _pretty(self, data: dict) -> str:
        """Human-readable format for development."""
        ts = data["ts"][11:23]
        lvl = data["level"][0]
        mod = data["module"].upper()[:12].ljust(12)
        skip = {"ts", "level", "module", "action", "msg"}
        ctx = " ".join(f"{k}={v}" for k, v in data.items() if k not in skip)
        line = f"{ts} {lvl} [{mod}] {data['action']}: {data['msg']}"
        return line + (f" | {ctx}" if ctx else "")


class StructuredLogger:
    """
    Centralized structured logging.

    All methods take a stdlib logger, a module name, an action name, a
    message and arbitrary context fields. None-valued context is dropped.
    """

    def _log(
        self,
        logger: logging.Logger,
        level: int,
        module: str,
        action: str,
        msg: str,
        **kwargs,
    ) -> None:
        extra = {
            "_structured": True,
            "_module": module,
            "_action": action,
            "_extra": {k: v for k, v in kwargs.items() if v is not None},
        }
        logger.log(level, msg, extra=extra)

    def info(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.INFO, module, action, msg, **kwargs)

    def warning(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.WARNING, module, action, msg, **kwargs)

    def error(
        self,
        logger: logging.Logger,
        module: str,
        action: str,
        msg: str,
        error: Optional[str] = None,
        error_type: Optional[str] = None,
        **kwargs,
    ) -> None:
        self._log(
            logger, logging.ERROR, module, action, msg,
            error=error, error_type=error_type, **kwargs,
        )

    def debug(self, logger: logging.Logger, module: str, action: str, msg: str, **kwargs) -> None:
        self._log(logger, logging.DEBUG, module, action, msg, **kwargs)


# Singleton instance: import this everywhere
log = StructuredLogger()


def get_logger(name: str = "core") -> logging.Logger:
    """Get a logger under the service namespace."""
    return logging.getLogger(f"{SERVICE}.{name}")


def configure_logging() -> None:
    """Configure the root logger with the structured formatter. Call once at startup.

    Reads from environment:
      LOG_FORMAT: "json" (default) or "pretty" (for development)
      LOG_LEVEL: "INFO" (default), "DEBUG", "WARNING", "ERROR"
    """
    pretty = os.environ.get("LOG_FORMAT", "json") == "pretty"
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(pretty=pretty))

    logging.basicConfig(level=level, handlers=[handler], force=True)

    # Provider SDK and HTTP clients log every request at INFO
    logging.getLogger("google_genai").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("langgraph").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
