# SPDX-License-Identifier: MIT
# Copyright (c) 2025 akv-secrets contributors

"""Structured logging adapter for akv-secrets.

Every module in the resolver logs through the ``Logger`` interface so the
enclosing controller can swap the JSON stdout output for an in-memory logger
in tests.

Example:
    >>> from akv_logging import create_logger
    >>> logger = create_logger(logger_type="stdout", level="INFO", name="akv-controller")
    >>> logger.info("Secret resolved", vault="my-vault", object_name="tls-cert")
"""

__version__ = "0.1.0"

from .factory import create_logger
from .logger import Logger
from .silent_logger import SilentLogger
from .stdout_logger import StdoutLogger

__all__ = [
    "__version__",
    "Logger",
    "SilentLogger",
    "StdoutLogger",
    "create_logger",
]
