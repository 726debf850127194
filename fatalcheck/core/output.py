# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
#
# See LICENSE for more details.

"""
Manages logging in fatalcheck.
"""
import logging
import sys

#: Pre-defined human UI logger, where fatal errors are reported
LOG_UI = logging.getLogger("fatalcheck.app")
#: Pre-defined test logger, where expectation outcomes are reported
LOG_JOB = logging.getLogger("fatalcheck.test")


def add_log_handler(logger, klass=logging.StreamHandler, stream=sys.stdout,
                    level=logging.INFO, fmt='%(name)s: %(message)s'):
    """
    Add handler to a logger.

    :param logger: the name of a :class:`logging.Logger` instance, that
                   is, the parameter to :func:`logging.getLogger`, or the
                   instance itself
    :param klass: Handler class (defaults to :class:`logging.StreamHandler`)
    :param stream: Logging stream, to be passed as an argument to ``klass``
                   (defaults to ``sys.stdout``)
    :param level: Log level (defaults to `INFO``)
    :param fmt: Logging format (defaults to ``%(name)s: %(message)s``)
    """
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    handler = klass(stream)
    handler.setLevel(level)
    if isinstance(fmt, str):
        fmt = logging.Formatter(fmt=fmt)
    handler.setFormatter(fmt)
    logger.addHandler(handler)
    logger.propagate = False
    return handler


def disable_log_handler(logger):
    if not logger:
        return
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    # Handlers might be reused elsewhere, can't delete them
    while logger.handlers:
        logger.handlers.pop()
    logger.handlers.append(logging.NullHandler())
    logger.propagate = False


def flush_streams():
    """Flushes standard streams and the handlers of the pre-defined loggers."""
    for logger in (LOG_UI, LOG_JOB):
        for handler in logger.handlers:
            handler.flush()
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()
