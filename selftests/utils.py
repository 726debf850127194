import logging
import os
import sys
import tempfile
import unittest

#: The base directory for the fatalcheck source tree
BASEDIR = os.path.dirname(os.path.abspath(__file__))
BASEDIR = os.path.abspath(os.path.join(BASEDIR, os.path.pardir))

#: The python interpreter used to run child processes
PYTHON = os.environ.get("UNITTEST_PYTHON_CMD", sys.executable)


def setup_fatalcheck_loggers():
    """
    Setup fatalcheck loggers to contain at least one logger

    Without a handler, messages logged at WARNING or above (such as the
    tracebacks of test bodies that raise on purpose) would end up in the
    last resort handler, that is, on the stderr of the test run.
    """
    for name in ('', 'fatalcheck.test', 'fatalcheck.app'):
        logger = logging.getLogger(name)
        if not logger.handlers:
            logger.handlers.append(logging.NullHandler())


def temp_dir_prefix(klass):
    """
    Returns a standard name for the temp dir prefix used by the tests
    """
    return 'fatalcheck_%s_' % klass.__class__.__name__


class TestCaseTmpDir(unittest.TestCase):

    def setUp(self):
        prefix = temp_dir_prefix(self)
        self.tmpdir = tempfile.TemporaryDirectory(prefix=prefix)

    def tearDown(self):
        self.tmpdir.cleanup()
