#!/usr/bin/env python3

"""Logging infrastructure for the application."""

from .logger_setup import LoggerSetup
from .message_log import LogMessage, MessageLevel, MessageLog
from .progress_tracker import ProgressTracker
from .utils import get_logger, log_timing

__all__ = [
    "LogMessage",
    "LoggerSetup",
    "MessageLevel",
    "MessageLog",
    "ProgressTracker",
    "get_logger",
    "log_timing",
]
