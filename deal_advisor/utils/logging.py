"""
Root-logger setup for the deal-advisor CLI.

The scoring, projection and loading modules only ever obtain
``logging.getLogger(__name__)`` and emit records; the CLI calls
``configure_logging()`` once per command to decide where those records go.

What gets logged
----------------
INFO     loader record counts (``Loaded 8 opportunities from ...``)
WARNING  IRR searches that stop without converging, header-only CSVs
DEBUG    scenario edits and ranking summaries (enabled by ``debug = true``)

Output
------
Plain text by default::

    2026-10-18T09:00:00Z [WARNING] deal_advisor.scenarios.irr: IRR not bracketed ...

or, with ``json_format = true`` under ``[logging]``, one JSON object per line
carrying ``ts``, ``level``, ``logger``, ``msg``, ``exc`` (on exceptions) and any
``extra=`` keys, e.g. ``{"scenario": "realistic"}``.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from deal_advisor.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came in through extra=
_STANDARD_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class JsonFormatter(logging.Formatter):
    """Render a record as a single JSON line with its ``extra=`` fields inlined."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "ts":     created.strftime(LOG_DATE_FORMAT),
            "level":  record.levelname,
            "logger": record.name,
            "msg":    record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, val)
            for key, val in vars(record).items()
            if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def build_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def _attach(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Route deal-advisor log records according to ``config``.

    Args:
        config: The ``[logging]`` section of ``AppConfig``.
        debug:  ``AppConfig.debug``; forces DEBUG regardless of ``config.level``.

    Replaces any handlers already on the root logger, so repeated CLI
    invocations in one process do not duplicate output.
    """
    level = logging.DEBUG if debug else getattr(logging, config.level, logging.INFO)
    formatter = build_formatter(config.json_format)

    handlers = [_attach(logging.StreamHandler(sys.stdout), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _attach(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
