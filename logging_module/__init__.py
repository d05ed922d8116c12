"""Logging module for the stream alerts service.

Main Components:
    - setup_logging: Configure console and optional JSON file logging
    - JsonFormatter: Structured JSON formatter for log files
    - LoggingConfig: Configuration management

Example:
    >>> from logging_module import LoggingConfig, setup_logging
    >>> setup_logging(LoggingConfig.from_env())
"""

from logging_module.config import LoggingConfig
from logging_module.logger import JsonFormatter, setup_logging

__version__ = "1.0.0"
__all__ = ["LoggingConfig", "JsonFormatter", "setup_logging"]
