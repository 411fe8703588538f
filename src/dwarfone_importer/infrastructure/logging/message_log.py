#!/usr/bin/env python3

"""Diagnostics sink collecting import problems."""

import logging
from dataclasses import dataclass
from enum import Enum

from .utils import get_logger


class MessageLevel(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class LogMessage:
    level: MessageLevel
    text: str
    exception: BaseException | None = None


class MessageLog:
    """Collects messages and exceptions reported during an import.

    Appending never raises; every entry is also forwarded to ``logger``.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_logger(__name__)
        self.messages: list[LogMessage] = []

    def append_msg(self, text: str) -> None:
        self.messages.append(LogMessage(MessageLevel.WARNING, text))
        self.logger.warning(text)

    def append_exception(self, exc: BaseException) -> None:
        text = f"{type(exc).__name__}: {exc}"
        self.messages.append(LogMessage(MessageLevel.ERROR, text, exc))
        self.logger.error(text)

    @property
    def has_messages(self) -> bool:
        return bool(self.messages)

    @property
    def error_count(self) -> int:
        return sum(1 for m in self.messages if m.level == MessageLevel.ERROR)

    def __len__(self) -> int:
        return len(self.messages)

    def __str__(self) -> str:
        return "\n".join(m.text for m in self.messages)
