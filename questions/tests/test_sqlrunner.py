from unittest.mock import Mock

import requests
from django.test import SimpleTestCase

from questions.sqlrunner import (
    BadPayloadError,
    QueryError,
    SchemaError,
    SqlRunner,
    SqlRunnerError,
    error_from_response,
)


def response(body, status_code=200):
    resp = Mock(status_code=status_code)
    resp.json.return_value = body
    return resp


class SqlRunnerTests(SimpleTestCase):
    def setUp(self):
        self.session = Mock()
        self.runner = SqlRunner(uri="http://runner:8080/", timeout=5, session=self.session)

    def test_query_success(self):
        self.session.post.return_value = response({
            "success": True,
            "data": {"columns": ["a"], "rows": [["1"], ["2"]]},
        })

        result = self.runner.query("CREATE TABLE t (a INT);", "SELECT a FROM t;")

        self.assertEqual(result.columns, ["a"])
        self.assertEqual(result.rows, [["1"], ["2"]])
        self.session.post.assert_called_once_with(
            "http://runner:8080/query",
            json={"schema": "CREATE TABLE t (a INT);", "query": "SELECT a FROM t;"},
            timeout=5,
        )

    def test_error_codes(self):
        for code, error_cls in (
            ("QUERY_ERROR", QueryError),
            ("SCHEMA_ERROR", SchemaError),
            ("BAD_PAYLOAD", BadPayloadError),
        ):
            self.session.post.return_value = response({"success": False, "code": code, "message": "boom"})
            with self.assertRaises(error_cls):
                self.runner.query("", "SELECT 1;")

    def test_unknown_code_is_internal(self):
        error = error_from_response("WHAT", "")
        self.assertIs(type(error), SqlRunnerError)

    def test_network_failure(self):
        self.session.post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(SqlRunnerError):
            self.runner.query("", "SELECT 1;")

    def test_non_json_response(self):
        resp = Mock(status_code=502)
        resp.json.side_effect = ValueError("no json")
        self.session.post.return_value = resp
        with self.assertRaises(SqlRunnerError):
            self.runner.query("", "SELECT 1;")

    def test_is_healthy(self):
        self.session.get.return_value = Mock(status_code=200)
        self.assertTrue(self.runner.is_healthy())

        self.session.get.side_effect = requests.Timeout()
        self.assertFalse(self.runner.is_healthy())
