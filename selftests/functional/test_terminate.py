import os
import subprocess
import unittest

from fatalcheck.core import exit_codes
from selftests.utils import BASEDIR, PYTHON, TestCaseTmpDir

FATAL_ERROR = """
import atexit
from fatalcheck import fatal_error

atexit.register(print, "atexit handler ran")
print("before", flush=True)
fatal_error("bad index")
print("after")
"""

EXPECT_THEN_FATAL_ERROR = """
from fatalcheck import expect_fatal_error, fatal_error

outcome = expect_fatal_error(lambda: fatal_error("expected"), "expected",
                             timeout=5.0)
print(outcome.status, flush=True)
fatal_error("for real")
"""

EXPECT_MISMATCH = """
from fatalcheck import expect_fatal_error, fatal_error

expect_fatal_error(lambda: fatal_error("bad index"), "wrong", timeout=5.0)
"""


class TerminateTest(TestCaseTmpDir):

    def setUp(self):
        super().setUp()
        self.env = os.environ.copy()
        self.env.pop('VIRTUAL_ENV', None)
        self.env['HOME'] = self.tmpdir.name
        pythonpath = self.env.get('PYTHONPATH')
        self.env['PYTHONPATH'] = (BASEDIR if not pythonpath
                                  else os.pathsep.join([BASEDIR, pythonpath]))

    def run_script(self, script):
        return subprocess.run([PYTHON, '-c', script], cwd=self.tmpdir.name,
                              env=self.env, capture_output=True, text=True,
                              timeout=60, check=False)

    def test_fatal_error_terminates(self):
        result = self.run_script(FATAL_ERROR)
        self.assertEqual(result.returncode, exit_codes.FATALCHECK_FATAL_ERROR)
        self.assertEqual(result.stdout, "before\n")
        self.assertIn(":7: Fatal error: bad index", result.stderr)

    def test_exit_code_from_user_config(self):
        config_dir = os.path.join(self.tmpdir.name, '.config', 'fatalcheck')
        os.makedirs(config_dir)
        with open(os.path.join(config_dir, 'fatalcheck.conf'), 'w') as conf:
            conf.write('[termination]\nexit_code = 7\n')
        result = self.run_script(FATAL_ERROR)
        self.assertEqual(result.returncode, 7)

    def test_hook_restored_after_expectation(self):
        result = self.run_script(EXPECT_THEN_FATAL_ERROR)
        self.assertEqual(result.stdout, "PASS\n")
        self.assertEqual(result.returncode, exit_codes.FATALCHECK_FATAL_ERROR)
        self.assertIn("Fatal error: for real", result.stderr)
        self.assertNotIn("Fatal error: expected", result.stderr)

    def test_mismatch_reported_as_assertion(self):
        result = self.run_script(EXPECT_MISMATCH)
        self.assertEqual(result.returncode, 1)
        self.assertIn("fatalcheck.core.exceptions.MessageMismatch",
                      result.stderr)
        self.assertIn("Expected 'wrong', got 'bad index'", result.stderr)


if __name__ == '__main__':
    unittest.main()
