# Path: config/logger.py
# Purpose: Configure application-wide logging for scripts and the HTTP API.
# Layer: config.
# Details: Installs a colourised console handler on the root logger; library modules only emit records.

from __future__ import annotations

import logging
from typing import Dict, Optional

_HANDLER_NAME = "wallet-console"


class ColourFormatter(logging.Formatter):
    """Formatter that colours each record according to its level."""

    grey = "\x1b[38;20m"
    yellow = "\x1b[33;20m"
    red = "\x1b[31;20m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"
    custom_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s (%(filename)s:%(lineno)d)"

    FORMATS: Dict[int, str] = {
        logging.DEBUG: grey + custom_format + reset,
        logging.INFO: grey + custom_format + reset,
        logging.WARNING: yellow + custom_format + reset,
        logging.ERROR: red + custom_format + reset,
        logging.CRITICAL: bold_red + custom_format + reset,
    }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno, self.custom_format)
        return logging.Formatter(log_fmt).format(record)


def configure_logging(level: str | int = "INFO", modules_to_quiet: Optional[list[str]] = None) -> logging.Logger:
    """Attach the console handler to the root logger once and apply ``level``."""

    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root_logger.setLevel(level)

    if not any(handler.get_name() == _HANDLER_NAME for handler in root_logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setFormatter(ColourFormatter())
        root_logger.addHandler(console_handler)

    for module in modules_to_quiet or []:
        logging.getLogger(module).setLevel(logging.WARNING)
    return root_logger


__all__ = ["ColourFormatter", "configure_logging"]
