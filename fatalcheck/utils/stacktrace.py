"""
Traceback standard module plus some additional APIs.
"""
import inspect
import logging
import os
from traceback import format_exception, format_exception_only


def tb_info(exc_info):
    """
    Prepare traceback info.

    :param exc_info: Exception info produced by sys.exc_info()
    """
    exc_type, exc_value, exc_traceback = exc_info
    return format_exception(exc_type, exc_value, exc_traceback.tb_next)


def prepare_exc_info(exc_info):
    """
    Prepare traceback info.

    :param exc_info: Exception info produced by sys.exc_info()
    """
    return "".join(tb_info(exc_info))


def exc_summary(exc_info):
    """
    One line summary of an exception, such as "ValueError: bad value".

    :param exc_info: Exception info produced by sys.exc_info()
    """
    exc_type, exc_value, _ = exc_info
    return "".join(format_exception_only(exc_type, exc_value)).strip()


def log_exc_info(exc_info, logger=None):
    """
    Log exception info to logger_name.

    :param exc_info: Exception info produced by sys.exc_info()
    :param logger: Name or logger instance (defaults to '')
    """
    logger = logger or __name__
    if isinstance(logger, str):
        logger = logging.getLogger(logger)
    logger.error('')
    called_from = inspect.currentframe().f_back
    logger.error("Reproduced traceback from: %s:%s",
                 called_from.f_code.co_filename, called_from.f_lineno)
    for trace in tb_info(exc_info):
        for line in trace.splitlines():
            logger.error(line)
    logger.error('')


def caller_location(skip=0):
    """
    Finds the file name and line number of a caller.

    With the default ``skip`` of 0, this is the location that called the
    function calling :func:`caller_location`.

    :param skip: additional number of frames to go up the stack
    :return: tuple with (filename, line), or (None, None) when the stack
             is not that deep
    """
    frame = inspect.currentframe()
    try:
        for _ in range(skip + 2):
            if frame is None:
                return None, None
            frame = frame.f_back
        if frame is None:
            return None, None
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


def format_location(location):
    """
    Formats a (filename, line) tuple as "filename:line".

    Unknown parts are left out, so (None, None) gives an empty string.
    """
    filename, line = location or (None, None)
    if filename is None:
        return ''
    if line is None:
        return os.fspath(filename)
    return "%s:%s" % (os.fspath(filename), line)
