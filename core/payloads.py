# core/payloads.py
"""
Typed views over ActivityEvent.payload.

The payload column is a loose JSON object. Each event type that carries data
the points granter needs gets a small frozen dataclass here, resolved once per
event by `parse_payload` instead of being re-read by every rule.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .constants import (
    EVENT_TYPE_LOGIN,
    EVENT_TYPE_IMPERSONATED,
    EVENT_TYPE_SUBMIT_ANSWER,
    PAYLOAD_SUBMISSION_ID,
    PAYLOAD_QUESTION_ID,
    PAYLOAD_STATUS,
    PAYLOAD_MACHINE,
    PAYLOAD_IMPERSONATOR_ID,
)
from .exceptions import MalformedPayloadError


@dataclass(frozen=True)
class LoginPayload:
    machine: Optional[str] = None


@dataclass(frozen=True)
class ImpersonatedPayload:
    impersonator_id: int


@dataclass(frozen=True)
class SubmitAnswerPayload:
    submission_id: int
    question_id: int
    status: Optional[str] = None


@dataclass(frozen=True)
class EmptyPayload:
    pass


EventPayload = Union[LoginPayload, ImpersonatedPayload, SubmitAnswerPayload, EmptyPayload]


def _require_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    # bool is an int subclass; JSON numbers may come back as floats
    if isinstance(value, bool):
        raise MalformedPayloadError(f"{key} has invalid type")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if value is None:
        raise MalformedPayloadError(f"{key} not found in payload")
    raise MalformedPayloadError(f"{key} has invalid type")


def parse_payload(event_type: str, payload: Optional[Mapping[str, Any]]) -> EventPayload:
    """Resolve the raw payload of an event into its typed form."""
    payload = payload or {}

    if event_type == EVENT_TYPE_SUBMIT_ANSWER:
        status = payload.get(PAYLOAD_STATUS)
        return SubmitAnswerPayload(
            submission_id=_require_int(payload, PAYLOAD_SUBMISSION_ID),
            question_id=_require_int(payload, PAYLOAD_QUESTION_ID),
            status=str(status) if status is not None else None,
        )

    if event_type == EVENT_TYPE_LOGIN:
        machine = payload.get(PAYLOAD_MACHINE)
        return LoginPayload(machine=str(machine) if machine is not None else None)

    if event_type == EVENT_TYPE_IMPERSONATED:
        return ImpersonatedPayload(impersonator_id=_require_int(payload, PAYLOAD_IMPERSONATOR_ID))

    return EmptyPayload()
