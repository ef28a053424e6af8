import io
import json
import re
import unittest
from pathlib import Path
from unittest.mock import patch

from firestore_fetch.output.writer import random_filename, serialize, write_result

FILENAME_PATTERN = re.compile(r"^[0-9a-f]{16}\.json$")


class TestWriteResult(unittest.TestCase):

    def test_random_filename_shape(self):
        names = {random_filename() for _ in range(20)}
        self.assertTrue(all(FILENAME_PATTERN.match(name) for name in names))
        self.assertGreater(len(names), 1)

    def test_file_written_to_working_directory(self):
        payload = [{"document": {"name": "a"}}, {"document": {"name": "b"}}]

        with self.assertLogs("firestore_fetch.output.writer", level="INFO") as logs:
            path = write_result(payload)

        self.assertEqual(path.parent, Path.cwd())
        self.assertRegex(path.name, FILENAME_PATTERN)
        self.assertEqual(path.read_text(encoding="utf-8"), serialize(payload))
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), payload)
        self.assertTrue(any("Number of documents returned: 2" in line for line in logs.output))

    def test_terminal_output_writes_no_file(self):
        stream = io.StringIO()

        path = write_result({"a": 1}, to_terminal=True, stream=stream)

        self.assertIsNone(path)
        self.assertEqual(stream.getvalue(), serialize({"a": 1}) + "\n")
        self.assertEqual(list(Path.cwd().iterdir()), [])

    def test_output_dir(self):
        target = Path.cwd() / "out"
        target.mkdir()
        path = write_result([], output_dir=target)
        self.assertEqual(path.parent, target)

    def test_filesystem_error_propagates(self):
        with patch("pathlib.Path.write_text", side_effect=PermissionError("read-only")):
            with self.assertRaises(OSError):
                write_result([])

    def test_non_ascii_values_are_written_verbatim(self):
        payload = [{"document": {"fields": {"name": {"stringValue": "Zoë 東京"}}}}]

        path = write_result(payload)

        text = path.read_text(encoding="utf-8")
        self.assertIn("Zoë 東京", text)
        self.assertNotIn("\\u", text)
