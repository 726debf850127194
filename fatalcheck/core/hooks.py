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
Replaceable hooks for functions that never return.

Production code that needs to bail out on an unrecoverable condition
calls :data:`fatal_error` instead of :func:`os.abort` or
:func:`sys.exit`::

    from fatalcheck.core.hooks import fatal_error

    def item(self, index):
        if index >= len(self.items):
            fatal_error("bad index")
        return self.items[index]

By default that ends the process. Tests swap the hook's function for a
capturing one, see :mod:`fatalcheck.core.expectation`.

Code that wants to avoid the process-wide hook altogether can accept a
:class:`NoReturnHook` as a parameter, and tests can then hand it a
private instance.
"""

import contextlib
import logging
import os

from fatalcheck.core import exit_codes
from fatalcheck.core.exceptions import HookReturned
from fatalcheck.core.output import LOG_UI, flush_streams
from fatalcheck.core.settings import settings
from fatalcheck.utils import stacktrace

LOG = logging.getLogger(__name__)


def terminate(message, filename, line):
    """
    Reports a fatal error and ends the current process.

    Nothing is cleaned up: no ``atexit`` handlers, no ``finally`` blocks.
    The exit status comes from the ``termination.exit_code`` setting.
    """
    location = stacktrace.format_location((filename, line))
    if location:
        LOG_UI.critical("%s: Fatal error: %s", location, message)
    else:
        LOG_UI.critical("Fatal error: %s", message)
    flush_streams()
    os._exit(settings.as_dict().get('termination.exit_code'))


class NoReturnHook:

    """
    A replaceable indirection for a function that never returns.

    The installed function is called with ``(message, filename, line)``
    and must not return. The hook keeps the function it was created with
    as :attr:`default`, so it can always be put back.
    """

    def __init__(self, name, default):
        self.name = name
        self.default = default
        self._function = default

    def __repr__(self):
        return '<NoReturnHook %s function=%r>' % (self.name, self._function)

    @property
    def function(self):
        """The function currently installed."""
        return self._function

    def is_default(self):
        return self._function is self.default

    def replace(self, function):
        """
        Installs a new function.

        :return: the function that was installed before, to be given back
                 to :meth:`restore`
        """
        previous = self._function
        self._function = function
        LOG.debug("Hook %s: replaced %r with %r", self.name, previous,
                  function)
        return previous

    def restore(self, function=None):
        """
        Installs the given function back, or the default one if None.
        """
        if function is None:
            function = self.default
        self._function = function
        LOG.debug("Hook %s: restored %r", self.name, function)

    @contextlib.contextmanager
    def replaced(self, function):
        """
        Context manager that installs function for the duration of a block.

        The previous function is installed back on every exit path.
        """
        previous = self.replace(function)
        try:
            yield previous
        finally:
            self.restore(previous)

    def __call__(self, message="", filename=None, line=None):
        # a partial location is passed through, never mixed with the caller's
        if filename is None and line is None:
            filename, line = stacktrace.caller_location()
        self._function(message, filename, line)
        raise HookReturned("The function installed in hook %s returned: %r"
                           % (self.name, self._function))


#: The process-wide hook standing in for an irrecoverable abort
fatal_error = NoReturnHook("fatal_error", terminate)  # pylint: disable=C0103


def register_options():
    help_msg = ('Exit status of a process ended by a fatal error that '
                'reached the real termination implementation.')
    settings.register_option(section='termination',
                             key='exit_code',
                             key_type=int,
                             default=exit_codes.FATALCHECK_FATAL_ERROR,
                             help_msg=help_msg)
