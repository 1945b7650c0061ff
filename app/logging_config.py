"""
Structured logging for the chat server.

JSON lines by default, colored console output when running at DEBUG.
Every event passes through ``redact_credentials`` so a stray keyword
argument can never put a model key or wallet secret into the log stream;
components identify a credential set by its fingerprint instead.
"""

import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog

from .config import settings

REDACTED = "[redacted]"

SECRET_FIELDS = frozenset({
    "openai_key",
    "openaikey",
    "model_api_key",
    "wallet_private_key",
    "walletprivatekey",
    "cdpprivatekey",
    "private_key",
    "privatekey",
    "api_keys",
    "apikeys",
})


def redact_credentials(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking values of credential-bearing keys."""
    for key in list(event_dict.keys()):
        if key.lower() in SECRET_FIELDS and event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.stdlib.get_logger(name)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure structlog and route stdlib logging through it.

    Args:
        log_level: Override log level (default: from settings.log_level)
    """
    level = getattr(logging, (log_level or settings.log_level).upper(), logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        redact_credentials,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if level == logging.DEBUG:
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    else:
        processors.append(structlog.processors.format_exc_info)
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # The agent SDKs log every HTTP round trip at INFO
    for name in ("uvicorn.access", "httpcore", "httpx", "openai", "langchain", "cdp"):
        logging.getLogger(name).setLevel(logging.WARNING)
