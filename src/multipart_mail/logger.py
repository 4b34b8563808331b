"""Logging utilities for the multipart mail composer.

This module provides a centralized logger lookup. The actual logging setup
(level, handlers, format) is configured via ``logging.basicConfig()`` in the
CLI entry point so that library users keep control of their own handlers.

Non-fatal composition problems (invalid attachments, unknown headers, an
empty recipient when not raising) are reported at WARNING level through
these loggers.

Example:
    Typical usage in a module::

        from multipart_mail.logger import get_logger

        logger = get_logger("MultipartEmail")
        logger.warning("Attachment not found: %s", 3)
"""

import logging


def get_logger(name: str = "MultipartMail") -> logging.Logger:
    """Retrieve a logger instance.

    This function returns a standard library logger with the specified name.
    It does not configure handlers or formatters; that responsibility lies
    with the application entry point.

    Args:
        name: The logger name. Defaults to "MultipartMail".

    Returns:
        A ``logging.Logger`` instance bound to the given name.
    """
    return logging.getLogger(name)
