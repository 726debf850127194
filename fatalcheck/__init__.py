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


__all__ = ['TestCase',
           'FatalErrorAssertions',
           'NoReturnHook',
           'fatal_error',
           'check',
           'expect_fatal_error',
           'NotCalled',
           'MessageMismatch',
           'VERSION']


from fatalcheck.core import register_core_options
from fatalcheck.core.settings import settings

register_core_options()
settings.merge_with_configs()

from fatalcheck.core.exceptions import MessageMismatch, NotCalled
from fatalcheck.core.expectation import check
from fatalcheck.core.hooks import NoReturnHook, fatal_error
from fatalcheck.core.test import (FatalErrorAssertions, TestCase,
                                  expect_fatal_error)
from fatalcheck.core.version import VERSION
