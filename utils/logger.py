from __future__ import annotations
from typing import TYPE_CHECKING
from loguru import logger as _logger

if TYPE_CHECKING:
    import loguru


class Logger:
    def log(self) -> loguru.Logger:
        _logger.remove()
        _logger.add(
            lambda msg: print(msg, end=""),
            level='INFO',
            filter=lambda record: record['level'].no <= 25,
            backtrace=False,
            diagnose=False,
        )

        _logger.add(
            lambda msg: print(msg, end=""),
            level='WARNING',
            filter=lambda record: record['level'].no >= 30,
            backtrace=True,
            diagnose=False,
        )

        return _logger


logger = Logger().log()
