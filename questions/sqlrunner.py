# questions/sqlrunner.py
"""
HTTP client for the sandboxed SQL runner.

POST {SQLRUNNER_URI}/query with {"schema": ..., "query": ...}. The runner
answers {"success": true, "data": {"columns": [...], "rows": [[...]]}} or
{"success": false, "code": ..., "message": ...}.
"""
import logging
from dataclasses import dataclass, field
from typing import List

import requests
from django.conf import settings

logger = logging.getLogger("dbplay.sqlrunner")


class SqlRunnerError(Exception):
    code = "INTERNAL_ERROR"

    def __init__(self, message="internal error"):
        super().__init__(message)
        self.message = message


class QueryError(SqlRunnerError):
    code = "QUERY_ERROR"


class SchemaError(SqlRunnerError):
    code = "SCHEMA_ERROR"


class BadPayloadError(SqlRunnerError):
    code = "BAD_PAYLOAD"


_ERRORS_BY_CODE = {cls.code: cls for cls in (QueryError, SchemaError, BadPayloadError)}


def error_from_response(code, message):
    """Map a runner error code to its exception; unknown codes are internal errors."""
    error_cls = _ERRORS_BY_CODE.get(code, SqlRunnerError)
    return error_cls(message or code or "internal error")


@dataclass
class DataResponse:
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def to_dict(self):
        return {"columns": list(self.columns), "rows": [list(r) for r in self.rows]}


class SqlRunner:
    def __init__(self, uri=None, timeout=None, session=None):
        self.uri = (uri or settings.SQLRUNNER_URI).rstrip("/")
        self.timeout = timeout or settings.SQLRUNNER_TIMEOUT
        self.session = session or requests.Session()

    def query(self, schema, query):
        url = f"{self.uri}/query"
        try:
            resp = self.session.post(
                url,
                json={"schema": schema, "query": query},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"SQL runner request failed: {e}")
            raise SqlRunnerError(f"send request: {e}") from e

        try:
            body = resp.json()
        except ValueError as e:
            raise SqlRunnerError(f"decode response (HTTP {resp.status_code}): {e}") from e

        if not body.get("success"):
            raise error_from_response(body.get("code"), body.get("message"))

        data = body.get("data") or {}
        return DataResponse(
            columns=list(data.get("columns") or []),
            rows=[list(r) for r in (data.get("rows") or [])],
        )

    def is_healthy(self):
        try:
            resp = self.session.get(f"{self.uri}/healthz", timeout=self.timeout)
        except requests.RequestException:
            return False
        return resp.status_code == 200
