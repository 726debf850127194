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
Checks that a callable ends up calling a no-return hook.

A body that calls a no-return function is never expected to come back,
so it can not be run inline while waiting on it. :func:`check` installs a
:class:`CapturingStub` in the hook, starts the body on a worker thread,
waits (bounded) for the stub to be called, and puts the hook's previous
function back.

Only one check may use a given hook at a time. The process-wide
:data:`fatalcheck.core.hooks.fatal_error` hook is shared by every test
in the process, so checks against it have to be serialized by the
caller.
"""

import logging
import sys
import threading

from fatalcheck.core import hooks
from fatalcheck.core.exceptions import MessageMismatch, NoReturn, NotCalled
from fatalcheck.core.output import LOG_JOB
from fatalcheck.core.settings import settings
from fatalcheck.utils import stacktrace

LOG = logging.getLogger(__name__)

#: Default number of seconds to wait for the hook to be called
NO_RETURN_FAILURE_WAIT_TIME = 0.1


class Invocation:

    """
    A single captured call of a no-return hook.
    """

    def __init__(self, message, filename=None, line=None, thread_name=None):
        self.message = message
        self.filename = filename
        self.line = line
        self.thread_name = thread_name

    def __repr__(self):
        return ('<Invocation message=%r location=%s thread=%s>'
                % (self.message,
                   stacktrace.format_location((self.filename, self.line)),
                   self.thread_name))


class CapturingStub:

    """
    Hook function that records its invocation instead of terminating.

    The first invocation is kept and signals completion, later ones are
    only counted. Every invocation raises :class:`NoReturn`, so the
    caller never runs past it.
    """

    def __init__(self, name="hook"):
        self.name = name
        self.invocation = None
        self.calls = 0
        self._called = threading.Event()
        self._lock = threading.Lock()

    def __call__(self, message, filename=None, line=None):
        with self._lock:
            self.calls += 1
            if self.invocation is None:
                self.invocation = Invocation(message, filename, line,
                                             threading.current_thread().name)
                self._called.set()
        LOG.debug("Captured %s call: %r", self.name, message)
        raise NoReturn(message)

    @property
    def called(self):
        return self._called.is_set()

    def wait(self, timeout):
        """
        Waits up to timeout seconds for the first invocation.

        :return: whether the stub was called
        """
        return self._called.wait(timeout)


class BodyWorker(threading.Thread):

    """
    Runs a test body that is expected to never return.

    The :class:`NoReturn` raised by a capturing stub ends the thread
    quietly. Any other exception is kept in :attr:`exc_info` and logged.
    """

    def __init__(self, body, name=None):
        super().__init__(name=name, daemon=True)
        self.body = body
        self.returned = False
        self.halted = False
        self.exc_info = None

    def run(self):
        LOG.debug("Worker %s started", self.name)
        try:
            self.body()
            self.returned = True
        except NoReturn:
            self.halted = True
        except Exception:  # pylint: disable=W0703
            self.exc_info = sys.exc_info()
            stacktrace.log_exc_info(self.exc_info, LOG)
        finally:
            # break the reference cycle of the body's frames
            self.body = None
        LOG.debug("Worker %s finished", self.name)

    @property
    def error(self):
        """Formatted traceback of the body's exception, if any."""
        if self.exc_info is None:
            return None
        return stacktrace.prepare_exc_info(self.exc_info)


class Outcome:

    """
    Result of a single check.

    :ivar status: "PASS" or "FAIL"
    :ivar invocation: the captured :class:`Invocation`, or None
    :ivar failure: the :class:`ExpectationFailure`, or None on success
    :ivar body_error: formatted traceback of an exception raised by the
                      body instead of calling the hook, or None
    """

    def __init__(self, invocation=None, failure=None, body_error=None):
        self.invocation = invocation
        self.failure = failure
        self.body_error = body_error

    @property
    def status(self):
        return "PASS" if self.failure is None else "FAIL"

    @property
    def passed(self):
        return self.failure is None

    @property
    def reason(self):
        if self.failure is None:
            return None
        return str(self.failure)

    def __repr__(self):
        return '<Outcome %s invocation=%r reason=%r>' % (self.status,
                                                         self.invocation,
                                                         self.reason)


def _get_timeout(timeout):
    if timeout is None:
        timeout = settings.as_dict().get('expectation.timeout')
    if timeout < 0:
        raise ValueError("timeout must not be negative: %r" % timeout)
    return timeout


def _prefix(location):
    location = stacktrace.format_location(location)
    if location:
        return location + ": "
    return ""


def check(body, expected_message=None, hook=None, timeout=None,
          location=None):
    """
    Runs body expecting it to call a no-return hook.

    :param body: callable, with no arguments, that should call the hook
    :param expected_message: the message the hook should be called with.
                             If None, any message is accepted.
    :param hook: the :class:`fatalcheck.core.hooks.NoReturnHook` to
                 intercept, defaults to
                 :data:`fatalcheck.core.hooks.fatal_error`
    :param timeout: seconds to wait for the hook to be called, defaults to
                    the ``expectation.timeout`` setting
    :param location: (filename, line) reported in failure messages,
                     defaults to the caller's location
    :rtype: :class:`Outcome`
    """
    if hook is None:
        hook = hooks.fatal_error
    timeout = _get_timeout(timeout)
    if location is None:
        location = stacktrace.caller_location()

    stub = CapturingStub(hook.name)
    worker = BodyWorker(body, name="fatalcheck-%s" % hook.name)
    previous = hook.replace(stub)
    try:
        worker.start()
        stub.wait(timeout)
    finally:
        hook.restore(previous)

    invocation = stub.invocation
    prefix = _prefix(location)
    if invocation is None:
        msg = "%s%s is expected to be called." % (prefix, hook.name)
        if worker.exc_info is not None:
            msg += " The test body raised: %s" % stacktrace.exc_summary(
                worker.exc_info)
        elif worker.returned:
            msg += " The test body returned without calling it."
        outcome = Outcome(failure=NotCalled(msg), body_error=worker.error)
    elif (expected_message is not None and
          invocation.message != expected_message):
        msg = ("%s%s called with incorrect message. Expected %r, got %r"
               % (prefix, hook.name, expected_message, invocation.message))
        outcome = Outcome(invocation,
                          MessageMismatch(msg, expected_message,
                                          invocation.message))
    else:
        outcome = Outcome(invocation)

    LOG_JOB.debug("%s%s expectation: %s", prefix, hook.name, outcome.status)
    return outcome


def register_options():
    help_msg = ('Number of seconds to wait for an expected no-return hook '
                'call before failing the expectation.')
    settings.register_option(section='expectation',
                             key='timeout',
                             key_type=float,
                             default=NO_RETURN_FAILURE_WAIT_TIME,
                             help_msg=help_msg)
