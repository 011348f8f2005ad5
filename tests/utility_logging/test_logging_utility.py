import contextlib
import io
import logging
import os
import shutil
import tempfile
import unittest

from batch_playground.utility.logging.status import Severity, report
from batch_playground.utility.logging.utility import (
    SUCCESS,
    ColoredFormatter,
    get_logger_info,
    setup_logger,
)


class TestSetupLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self) -> None:
        setup_logger()
        shutil.rmtree(self.temp_dir)

    def test_file_handler_and_level(self):
        log_path = os.path.join(self.temp_dir, "logs", "provision.log")
        setup_logger((log_path,), logging_level="debug")

        logging.debug("written to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_format, level, paths = get_logger_info(logging.getLogger())
        self.assertEqual(level, "DEBUG")
        self.assertEqual(paths, (log_path,))
        self.assertIn("%(message)s", log_format)

        with open(log_path) as f:
            self.assertIn("written to file", f.read())

    def test_stdout_uses_colored_formatter(self):
        setup_logger(("/dev/stdout",))

        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0].formatter, ColoredFormatter)

    def test_stdout_path_writes_to_stdout(self):
        stdout, stderr = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            setup_logger(("/dev/stdout",))
            logging.info("provisioning started")

        self.assertIn("provisioning started", stdout.getvalue())
        self.assertEqual(stderr.getvalue(), "")

    def test_setup_replaces_previous_handlers(self):
        setup_logger(("/dev/stdout",))
        setup_logger(("/dev/stdout",))

        self.assertEqual(len(logging.getLogger().handlers), 1)


class TestColoredFormatter(unittest.TestCase):
    def test_success_line_is_green(self):
        formatter = ColoredFormatter("%(levelname)s %(message)s")
        record = logging.LogRecord("root", SUCCESS, __file__, 1, "Pool created", None, None)

        self.assertEqual(formatter.format(record), "\033[32mSUCCESS Pool created\033[0m")


class TestReport(unittest.TestCase):
    def test_severity_maps_to_level(self):
        expected = {
            Severity.PROGRESS: "INFO",
            Severity.SUCCESS: "SUCCESS",
            Severity.NOTICE: "WARNING",
            Severity.FAILURE: "ERROR",
        }

        for severity, level_name in expected.items():
            with self.subTest(severity=severity):
                with self.assertLogs(level="INFO") as logs:
                    report(severity, "status line")
                self.assertEqual(logs.records[0].levelname, level_name)
                self.assertEqual(logs.records[0].getMessage(), "status line")

    def test_report_to_named_logger(self):
        logger = logging.getLogger("batch_playground.test")
        with self.assertLogs(logger, level="INFO") as logs:
            report(Severity.SUCCESS, "done", logger=logger)

        self.assertEqual(logs.output, ["SUCCESS:batch_playground.test:done"])
