# locator_resolver/utils/logger.py
from __future__ import annotations

"""Package logging
-----------------
All records go through the `locator_resolver` logger: a rich console handler
on stderr and, with LOG_TO_FILE, a rotating JSON-lines file. The root logger
is never touched, so embedding applications keep their own setup.
"""

import json
import logging
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, List, MutableMapping, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from locator_resolver.utils.config import Settings, get_settings


__all__ = [
    "configure_logging",
    "get_logger",
    "set_log_level",
    "log_with_context",
]

PACKAGE_LOGGER = "locator_resolver"
CONTEXT_ATTR = "context"

_lock = threading.Lock()
_configured = False


class JsonLinesFormatter(logging.Formatter):
    """One JSON object per record; bound context is nested under `context`."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = getattr(record, CONTEXT_ATTR, None)
        if context:
            entry[CONTEXT_ATTR] = context
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _build_handlers(settings: Settings, level: int) -> List[logging.Handler]:
    console = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=settings.COLORIZED_OUTPUT,
    )
    console.setFormatter(logging.Formatter("%(message)s"))
    handlers: List[logging.Handler] = [console]

    if settings.LOG_TO_FILE:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        rotating = RotatingFileHandler(
            settings.LOG_FILE,
            maxBytes=2 * 1024 * 1024,
            backupCount=3,
            encoding="utf-8",
            delay=True,
        )
        rotating.setFormatter(JsonLinesFormatter())
        handlers.append(rotating)

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def configure_logging(settings: Optional[Settings] = None, *, force: bool = False) -> None:
    """
    Attach handlers to the package logger from `settings` (default: the
    current settings). Only the first call has an effect unless `force`.
    """
    global _configured
    with _lock:
        if _configured and not force:
            return
        settings = settings or get_settings()
        level = logging.getLevelName(settings.LOG_LEVEL.value)

        pkg = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(pkg.handlers):
            pkg.removeHandler(handler)
            handler.close()
        for handler in _build_handlers(settings, level):
            pkg.addHandler(handler)
        pkg.setLevel(level)
        _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not _configured:
        configure_logging()
    return logging.getLogger(name or PACKAGE_LOGGER)


def set_log_level(level: str) -> None:
    if not _configured:
        configure_logging()
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg.setLevel(level.upper())
    for handler in pkg.handlers:
        handler.setLevel(level.upper())


class _ContextAdapter(logging.LoggerAdapter):
    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra[CONTEXT_ATTR] = {**self.extra, **extra.get(CONTEXT_ATTR, {})}
        kwargs["extra"] = extra
        return msg, kwargs


def log_with_context(logger: logging.Logger | logging.LoggerAdapter, **context: Any) -> logging.LoggerAdapter:
    """
    Scope `context` onto every record logged through the returned adapter.
    Adapters nest: binding onto an adapter keeps the outer context.

        scoped = log_with_context(log, selectors_file="extra.yaml")
        scoped.debug("registering")
    """
    if isinstance(logger, _ContextAdapter):
        return _ContextAdapter(logger.logger, {**logger.extra, **context})
    return _ContextAdapter(logger, dict(context))
