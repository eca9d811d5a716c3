import io
import unittest

from scriptlet.lang.error import ErrorHandler, GenericException


class GenericExceptionTestCase(unittest.TestCase):

    def test_init(self):
        error = GenericException("expected {}, got {}", ("';'", "'x'"))
        self.assertEqual("expected ';', got 'x'", str(error))
        self.assertEqual("';'", error.expr)
        self.assertEqual("';'", error.line)
        self.assertTrue(error.fatal)
        self.assertIsNone(error.line_num)

        error = GenericException("undefined variable '{}'", "z", line="y = z;", line_num=3, start=4, end=5)
        self.assertEqual("undefined variable 'z'", str(error))
        self.assertEqual("y = z;", error.line)
        self.assertEqual((3, 4, 5), (error.line_num, error.start, error.end))

    def test_defaults(self):
        error = GenericException("keyboard interrupt")
        self.assertEqual("keyboard interrupt", str(error))
        self.assertEqual("", error.line)
        self.assertEqual(0, error.end)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_fatal(self):
        stream = io.StringIO()
        with self.assertRaises(SystemExit) as ctx:
            with ErrorHandler(stream=stream):
                raise GenericException("undefined variable '{}'", "z", line="x = z;", line_num=1, start=4, end=5)

        self.assertEqual(1, ctx.exception.code)
        self.assertIn("error: ", stream.getvalue())
        self.assertIn("undefined variable", stream.getvalue())

    def test_non_fatal(self):
        stream = io.StringIO()
        with ErrorHandler(stream=stream):
            raise GenericException("unexpected token {}", "'1'", fatal=False)
        self.assertIn("unexpected token", stream.getvalue())

    def test_handler_not_fatal(self):
        stream = io.StringIO()
        with ErrorHandler(fatal=False, stream=stream):
            raise GenericException("expected {}, got {}", ("';'", "'x'"))
        self.assertIn("expected", stream.getvalue())

    def test_location(self):
        stream = io.StringIO()
        error_handler = ErrorHandler(fatal=False, stream=stream)
        error_handler.register_file("prog.sl")
        with error_handler:
            raise GenericException("undefined variable '{}'", "z", line="x = z;", line_num=2, start=4, end=5)

        output = stream.getvalue()
        self.assertIn("prog.sl:2:5: ", output)
        self.assertIn("x = ", output)
        self.assertIn("^", output)

    def test_diagnose(self):
        error = GenericException("bad", "abc", line="x = abc;", start=4, end=7)
        lines = ErrorHandler.diagnose(error).split("\n")
        self.assertEqual(2, len(lines))
        self.assertIn("abc", lines[0])
        self.assertIn("^~~", lines[1])
        self.assertTrue(lines[1].startswith(" " * 6))

    def test_internal(self):
        stream = io.StringIO()
        with self.assertRaises(SystemExit):
            with ErrorHandler(stream=stream):
                raise ValueError("boom")
        self.assertIn("[internal]", stream.getvalue())
        self.assertIn("ValueError: boom", stream.getvalue())

    def test_recursion(self):
        stream = io.StringIO()
        with self.assertRaises(SystemExit):
            with ErrorHandler(stream=stream):
                raise RecursionError()
        self.assertIn("nested too deeply", stream.getvalue())

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit) as ctx:
            with ErrorHandler(stream=io.StringIO()):
                raise SystemExit(3)
        self.assertEqual(3, ctx.exception.code)

    def test_no_error(self):
        stream = io.StringIO()
        with ErrorHandler(stream=stream) as error_handler:
            self.assertIsInstance(error_handler, ErrorHandler)
        self.assertEqual("", stream.getvalue())


if __name__ == '__main__':
    unittest.main()
