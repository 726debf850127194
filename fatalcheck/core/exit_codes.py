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
Exit status codes.

These codes are returned by a process that was ended by the real
termination hook, and may be used by whatever runs that process (a
test runner, a supervisor, a shell script) to tell a fatal error apart
from other kinds of exits.
"""

#: The process was ended by :func:`fatalcheck.core.hooks.terminate`, that
#: is, a ``fatal_error`` call reached the real termination implementation.
#: Can be changed with the ``termination.exit_code`` setting.
FATALCHECK_FATAL_ERROR = 0x0086
