import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path
from unittest.mock import MagicMock, patch

import requests
from invoke import Context

from firestore_fetch import tasks
from .base import make_response

PAYLOAD = [{"document": {"name": "d"}}]


class TestTasks(unittest.TestCase):
    """Invoke tasks share the CLI flow; HTTP is mocked at the session level."""

    def setUp(self):
        self.session = MagicMock(spec=requests.Session)
        self.session.headers = {}
        self.session.proxies = {}
        for patcher in (
            patch("firestore_fetch.session.requests.Session", return_value=self.session),
            patch.object(tasks, "bootstrap_logging"),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        Path("config").mkdir()
        Path("config/firebase.yaml").write_text("apiKey: k\nprojectId: p\n", encoding="utf-8")

    def test_namespace_exposes_tasks(self):
        self.assertEqual(set(tasks.namespace.task_names), {"fetch", "token"})

    def test_fetch_requires_collection(self):
        stderr = StringIO()
        with redirect_stderr(stderr):
            self.assertFalse(tasks.fetch(Context()))
        self.assertIn("Collection required", stderr.getvalue())

    def test_fetch_prints_documents(self):
        self.session.post.side_effect = [
            make_response(200, {"idToken": "anon"}),
            make_response(200, PAYLOAD),
        ]
        stdout = StringIO()
        with redirect_stdout(stdout):
            self.assertTrue(tasks.fetch(Context(), collection="users", limit="2", output=True))

        self.assertEqual(json.loads(stdout.getvalue()), PAYLOAD)
        body = self.session.post.call_args_list[1].kwargs["json"]
        self.assertEqual(body["structuredQuery"]["limit"], 2)

    def test_token_prints_anonymous_token(self):
        self.session.post.return_value = make_response(200, {"idToken": "anon-token"})
        stdout, stderr = StringIO(), StringIO()
        with redirect_stdout(stdout), redirect_stderr(stderr):
            self.assertTrue(tasks.token(Context(), referer="https://app.example.com"))

        self.assertEqual(stdout.getvalue().strip(), "anon-token")
        self.assertIn('"hash"', stderr.getvalue())
        self.session.close.assert_called_once()

    def test_token_failure_returns_false(self):
        self.session.post.return_value = make_response(400, {}, reason="Bad Request")
        stderr = StringIO()
        with redirect_stderr(stderr):
            self.assertFalse(tasks.token(Context()))
        self.assertIn("Token generation failed", stderr.getvalue())
