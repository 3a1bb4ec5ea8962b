# smartspend/core/logging.py
# Plain JSON logging to stdout + levels

from __future__ import annotations
import logging
import sys

_JSON_FMT = (
    '{"level":"%(levelname)s","ts":"%(asctime)s",'
    '"name":"%(name)s","msg":"%(message)s"}'
)

# third-party loggers that flood INFO with per-request lines
_NOISY = ("aiogram.event", "httpx", "openai")


def setup_logging(level: str = "INFO") -> None:
    logger = logging.getLogger()
    logger.handlers.clear()
    logger.setLevel(level.upper())

    h = logging.StreamHandler(sys.stdout)
    h.setFormatter(logging.Formatter(_JSON_FMT))
    logger.addHandler(h)

    if level.upper() != "DEBUG":
        for name in _NOISY:
            logging.getLogger(name).setLevel(logging.WARNING)
