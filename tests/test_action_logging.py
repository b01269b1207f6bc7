import tempfile
import unittest
from pathlib import Path

from flask import Flask

from confee.core.action_logging import describe_error, event_origin, make_update_log, one_line
from confee.core.errors import MalformedLine


class UpdateLogTests(unittest.TestCase):
    def test_one_line(self):
        self.assertEqual(one_line(" a\nb\r  c "), "a b c")
        self.assertEqual(one_line(None), "")

    def test_describe_error(self):
        self.assertEqual(describe_error(ValueError("boom")), "ValueError: boom")
        self.assertEqual(describe_error(KeyError()), "KeyError")
        self.assertEqual(len(describe_error(ValueError("x" * 1000))), 300)

    def test_origin_outside_and_inside_request(self):
        self.assertEqual(event_origin(), "confee")
        app = Flask(__name__)
        with app.test_request_context("/", headers={"X-Forwarded-For": "10.0.0.5, 10.0.0.1"}):
            self.assertEqual(event_origin(), "10.0.0.5")

    def test_success_and_failure_lines(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "logs" / "confee.log"
            log_update = make_update_log(log_file)
            log_update("update", source=Path("/etc/app.conf"), keys=2)
            log_update("update", source="/etc/app.conf", error=MalformedLine(3, "oops\n"))
            lines = log_file.read_text(encoding="utf-8").splitlines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].endswith("<confee> [confee/update] source=/etc/app.conf keys=2"))
        self.assertIn("source=/etc/app.conf error=MalformedLine: line 3: malformed line", lines[1])
        self.assertNotIn("keys=", lines[1])

    def test_log_file_rotates(self):
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            log_file = root / "confee.log"
            log_file.write_text("x" * 100, encoding="utf-8")
            (root / "confee.log.1").write_text("older", encoding="utf-8")
            make_update_log(log_file, max_bytes=10)("update", keys=0)
            self.assertEqual((root / "confee.log.1").read_text(encoding="utf-8"), "x" * 100)
            self.assertEqual((root / "confee.log.2").read_text(encoding="utf-8"), "older")
            self.assertEqual(len(log_file.read_text(encoding="utf-8").splitlines()), 1)

    def test_unwritable_log_is_ignored(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "not_a_dir"
            blocker.write_text("", encoding="utf-8")
            make_update_log(blocker / "confee.log")("update", keys=1)


if __name__ == "__main__":
    unittest.main()
