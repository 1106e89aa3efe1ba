from django.test import SimpleTestCase

from core.exceptions import MalformedPayloadError
from core.payloads import (
    EmptyPayload,
    ImpersonatedPayload,
    LoginPayload,
    SubmitAnswerPayload,
    parse_payload,
)


class ParsePayloadTests(SimpleTestCase):
    def test_submit_answer(self):
        payload = parse_payload("submit_answer", {"submission_id": 3, "question_id": 42, "status": "success"})
        self.assertEqual(payload, SubmitAnswerPayload(submission_id=3, question_id=42, status="success"))

    def test_integral_floats_are_accepted(self):
        payload = parse_payload("submit_answer", {"submission_id": 3.0, "question_id": 42.0})
        self.assertEqual(payload.submission_id, 3)
        self.assertEqual(payload.question_id, 42)

    def test_missing_keys(self):
        with self.assertRaises(MalformedPayloadError):
            parse_payload("submit_answer", {"question_id": 42})
        with self.assertRaises(MalformedPayloadError):
            parse_payload("submit_answer", None)

    def test_invalid_types(self):
        for bad in ("42", True, 4.5, [42]):
            with self.assertRaises(MalformedPayloadError):
                parse_payload("submit_answer", {"submission_id": 1, "question_id": bad})

    def test_login(self):
        self.assertEqual(parse_payload("login", {"machine": "Firefox"}), LoginPayload(machine="Firefox"))
        self.assertEqual(parse_payload("login", {}), LoginPayload())

    def test_impersonated(self):
        self.assertEqual(parse_payload("impersonated", {"impersonator_id": 1}), ImpersonatedPayload(impersonator_id=1))

    def test_event_without_payload(self):
        self.assertEqual(parse_payload("logout", {}), EmptyPayload())
