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
Exception classes, used both by the expectation checker and by the
hooks it intercepts.
"""


class FatalCheckError(Exception):

    """
    The parent of all fatalcheck library errors.
    """
    status = "ERROR"


class HookReturned(FatalCheckError):

    """
    Indicates that a function installed in a no-return hook returned.

    Functions standing in for process termination must never return
    control to their caller, so this is a broken hook, not a test
    failure.
    """
    status = "ERROR"


class NoReturn(BaseException):

    """
    Raised by the capturing stub after it records an invocation.

    It unwinds the test body the same way a real termination would have
    stopped it. It derives from :class:`BaseException` so that ordinary
    ``except Exception`` blocks in the code under test do not swallow it.
    """

    def __init__(self, message=None):
        super().__init__(message)
        self.message = message


class ExpectationFailure(AssertionError):

    """
    The parent of all expectation failures.

    It inherits from AssertionError so that test runners (unittest,
    pytest) report it as a failure and not as an error.
    """
    status = "FAIL"
    kind = None


class NotCalled(ExpectationFailure):

    """
    Indicates that the expected termination call never occurred.
    """
    kind = "NotCalled"


class MessageMismatch(ExpectationFailure):

    """
    Indicates that the termination call occurred, but with a message other
    than the expected one.
    """
    kind = "MessageMismatch"

    def __init__(self, msg, expected, actual):
        super().__init__(msg)
        self.expected = expected
        self.actual = actual
