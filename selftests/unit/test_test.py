import inspect
import unittest

from fatalcheck.core import hooks
from fatalcheck.core import test as fatalcheck_test
from fatalcheck.core.exceptions import MessageMismatch, NotCalled
from selftests.utils import setup_fatalcheck_loggers

setup_fatalcheck_loggers()

CALLED_TIMEOUT = 5.0


class Stop(Exception):
    pass


def bail_out(message, filename, line):
    raise Stop(message)


class DummyTest(fatalcheck_test.TestCase):

    def runTest(self):
        pass


class CustomFailure(Exception):
    pass


class CustomTest(fatalcheck_test.FatalErrorAssertions):

    @staticmethod
    def fail(msg=None):
        raise CustomFailure(msg)


class FatalErrorAssertionsTest(fatalcheck_test.FatalErrorAssertions,
                               unittest.TestCase):

    def setUp(self):
        self.previous = hooks.fatal_error.replace(bail_out)
        self.hook = hooks.NoReturnHook("bail_out", bail_out)
        self.dummy = DummyTest()

    def tearDown(self):
        hooks.fatal_error.restore(self.previous)

    def test_expect_fatal_error(self):
        outcome = self.expect_fatal_error(
            lambda: hooks.fatal_error("bad index"),
            expected_message="bad index", timeout=CALLED_TIMEOUT)
        self.assertTrue(outcome.passed)
        self.assertIs(hooks.fatal_error.function, bail_out)

    def test_expect_fatal_error_any_message(self):
        outcome = self.expect_fatal_error(
            lambda: hooks.fatal_error("whatever"), timeout=CALLED_TIMEOUT)
        self.assertEqual(outcome.invocation.message, "whatever")

    def test_expect_fatal_error_mismatch(self):
        def body():
            hooks.fatal_error("bad index")

        with self.assertRaises(self.failureException) as ctx:
            line = inspect.currentframe().f_lineno + 1
            self.dummy.expect_fatal_error(body, "wrong", CALLED_TIMEOUT)
        msg = str(ctx.exception)
        self.assertIn("%s:%s: " % (__file__, line), msg)
        self.assertIn("fatal_error called with incorrect message", msg)
        self.assertIn("'wrong'", msg)
        self.assertIn("'bad index'", msg)
        self.assertIs(hooks.fatal_error.function, bail_out)

    def test_expect_fatal_error_not_called(self):
        with self.assertRaises(self.failureException) as ctx:
            line = inspect.currentframe().f_lineno + 1
            self.dummy.expect_fatal_error(lambda: None, timeout=0.05)
        msg = str(ctx.exception)
        self.assertIn("%s:%s: " % (__file__, line), msg)
        self.assertIn("fatal_error is expected to be called.", msg)
        self.assertIs(hooks.fatal_error.function, bail_out)

    def test_expect_fatal_error_private_hook(self):
        outcome = self.expect_fatal_error(lambda: self.hook("no way"),
                                          expected_message="no way",
                                          timeout=CALLED_TIMEOUT,
                                          hook=self.hook)
        self.assertTrue(outcome.passed)
        self.assertTrue(self.hook.is_default())

    def test_expect_no_return(self):
        outcome = self.expect_no_return(self.hook, lambda: self.hook("no way"),
                                        expected_message="no way",
                                        timeout=CALLED_TIMEOUT)
        self.assertTrue(outcome.passed)

    def test_expect_no_return_not_called(self):
        with self.assertRaises(self.failureException) as ctx:
            self.dummy.expect_no_return(self.hook, lambda: None, timeout=0.05)
        self.assertIn("bail_out is expected to be called.", str(ctx.exception))
        self.assertTrue(self.hook.is_default())

    def test_custom_fail(self):
        with self.assertRaises(CustomFailure) as ctx:
            CustomTest().expect_fatal_error(lambda: None, timeout=0.05)
        self.assertIn("fatal_error is expected to be called.",
                      str(ctx.exception))


class ExpectFatalErrorTest(unittest.TestCase):

    def setUp(self):
        self.previous = hooks.fatal_error.replace(bail_out)

    def tearDown(self):
        hooks.fatal_error.restore(self.previous)

    def test_passes(self):
        outcome = fatalcheck_test.expect_fatal_error(
            lambda: hooks.fatal_error("bad index"), "bad index",
            timeout=CALLED_TIMEOUT)
        self.assertTrue(outcome.passed)

    def test_mismatch(self):
        with self.assertRaises(MessageMismatch) as ctx:
            fatalcheck_test.expect_fatal_error(
                lambda: hooks.fatal_error("bad index"), "wrong",
                timeout=CALLED_TIMEOUT)
        self.assertEqual(ctx.exception.expected, "wrong")
        self.assertEqual(ctx.exception.actual, "bad index")
        self.assertTrue(str(ctx.exception).startswith(__file__ + ":"))

    def test_not_called(self):
        with self.assertRaises(NotCalled) as ctx:
            fatalcheck_test.expect_fatal_error(lambda: None, timeout=0.05)
        self.assertIsInstance(ctx.exception, AssertionError)
        self.assertIs(hooks.fatal_error.function, bail_out)


if __name__ == '__main__':
    unittest.main()
