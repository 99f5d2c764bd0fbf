"""Structured logger backed by loguru.

Repositories report failures through the ``Logger`` protocol, passing a
message and a flat mapping of tags (url, status, body, error). This adapter
binds the tags as loguru ``extra`` fields, so sinks can serialize them, and
appends them to the message for the default console format.
"""

from typing import Dict, Optional

from loguru import logger

from linkedin_ads.core.context import RequestContext


class LoguruLogger:
    """Logger collaborator writing to the global loguru logger."""

    def __init__(self, name: str = "linkedin_ads"):
        self._logger = logger.bind(component=name)

    def info(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        self._log("INFO", message, tags)

    def warn(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        self._log("WARNING", message, tags)

    def error(self, ctx: Optional[RequestContext], message: str, tags: Dict[str, str]) -> None:
        self._log("ERROR", message, tags)

    def _log(self, level: str, message: str, tags: Optional[Dict[str, str]]) -> None:
        tags = tags or {}
        rendered = " ".join(f"{key}={value}" for key, value in sorted(tags.items()))
        text = f"{message} {rendered}" if rendered else message
        # opt(depth=2) attributes the record to whoever called info/warn/error
        self._logger.bind(**tags).opt(depth=2).log(level, "{}", text)
