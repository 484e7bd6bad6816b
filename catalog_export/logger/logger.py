# logger.py
import logging
import sys
from typing import Union


class Logger:
    """Package-wide logger configuration with class-level helpers.

    Handlers are attached to the ``catalog_export`` logger once; module
    loggers created with ``logging.getLogger(__name__)`` propagate to it.
    """

    NAME = "catalog_export"
    FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    _logger = None

    @classmethod
    def setup(cls, level: Union[int, str] = logging.INFO) -> None:
        """Initialize logger configuration once; later calls only change the level."""
        if cls._logger is None:
            cls._logger = logging.getLogger(cls.NAME)

            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(logging.Formatter(cls.FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            cls._logger.addHandler(handler)

        cls._logger.setLevel(level)

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Return the package logger, configuring it on first use."""
        if cls._logger is None:
            cls.setup()
        return cls._logger

    @classmethod
    def error(cls, msg: str, *args, **kwargs) -> None:
        cls.get_logger().error(msg, *args, **kwargs)
