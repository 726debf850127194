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
Test case adapters for the no-return expectations.
"""

import unittest

from fatalcheck.core import expectation, hooks
from fatalcheck.utils import stacktrace


class FatalErrorAssertions:

    """
    Mixin adding no-return expectations to a test case class.

    Failures are reported through the test case's own ``fail()`` method,
    so it works with :class:`unittest.TestCase` and with any test class
    providing a compatible ``fail(msg)``.
    """

    def expect_fatal_error(self, test_case, expected_message=None,
                           timeout=None, hook=None):
        """
        Expects :data:`fatalcheck.core.hooks.fatal_error` to be called.

        If it is not called, or is called with a message other than
        expected_message, the test fails, pointing at the line that
        called this method.

        :param test_case: callable, with no arguments, that should call
                          ``fatal_error``
        :param expected_message: the expected message. If None, then
                                 ignored.
        :param timeout: seconds to wait for the call
        :param hook: hook to intercept instead of the process-wide one
        :rtype: :class:`fatalcheck.core.expectation.Outcome`
        """
        if hook is None:
            hook = hooks.fatal_error
        location = stacktrace.caller_location()
        return self._expect(hook, test_case, expected_message, timeout,
                            location)

    def expect_no_return(self, hook, test_case, expected_message=None,
                         timeout=None):
        """
        Expects the given no-return hook to be called.

        Same as :meth:`expect_fatal_error`, for any
        :class:`fatalcheck.core.hooks.NoReturnHook`.
        """
        location = stacktrace.caller_location()
        return self._expect(hook, test_case, expected_message, timeout,
                            location)

    def _expect(self, hook, test_case, expected_message, timeout, location):
        outcome = expectation.check(test_case, expected_message, hook,
                                    timeout, location)
        if not outcome.passed:
            self.fail(outcome.reason)
        return outcome


class TestCase(FatalErrorAssertions, unittest.TestCase):

    """
    :class:`unittest.TestCase` with no-return expectations.
    """


def expect_fatal_error(test_case, expected_message=None, timeout=None,
                       hook=None):
    """
    Expects :data:`fatalcheck.core.hooks.fatal_error` to be called.

    Plain function version of
    :meth:`FatalErrorAssertions.expect_fatal_error`, for test runners that
    take an :class:`AssertionError` as a failure. The failure raised is a
    :class:`fatalcheck.core.exceptions.NotCalled` or
    :class:`fatalcheck.core.exceptions.MessageMismatch`.
    """
    location = stacktrace.caller_location()
    outcome = expectation.check(test_case, expected_message, hook, timeout,
                                location)
    if not outcome.passed:
        raise outcome.failure
    return outcome
