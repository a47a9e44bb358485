# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the payloads unit so this responsibility stays isolated, testable, and easy to evolve.

Classification of the ad-hoc values handed to ``ResponseWriter`` into a small
tagged union, and conversion of each variant into the object that gets
serialized as the response body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Union, runtime_checkable

from httpreply.models.envelope import Envelope


@runtime_checkable
class StatusMessage(Protocol):
    """Anything that reports its own HTTP status code and client message."""

    status_code: int
    message: str


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Fault:
    error: BaseException


@dataclass(frozen=True)
class Classified:
    status_code: int
    message: str


@dataclass(frozen=True)
class Raw:
    value: Any


Payload = Union[Text, Fault, Classified, Raw]


def _is_status_message(value: Any) -> bool:
    # isinstance() against a data protocol only checks attribute presence
    if not isinstance(value, StatusMessage):
        return False
    return isinstance(value.status_code, int) and isinstance(value.message, str)


def classify(payload: Any, *, honour_capability: bool = False) -> Payload:
    """Sort ``payload`` into one variant.

    Checked in order: status/message capability (only when
    ``honour_capability`` is set), ``str``, exception instance, anything else.
    ``None`` ends up as ``Raw(None)``.
    """
    if honour_capability and _is_status_message(payload):
        return Classified(payload.status_code, payload.message)
    if isinstance(payload, str):
        return Text(payload)
    if isinstance(payload, BaseException):
        return Fault(payload)
    return Raw(payload)


def to_body(payload: Payload, status_code: int) -> Any:
    """Return the object to serialize for ``payload`` under ``status_code``."""
    if isinstance(payload, Text):
        return Envelope(code=status_code, message=payload.text)
    if isinstance(payload, Fault):
        return Envelope(code=status_code, message=str(payload.error))
    if isinstance(payload, Classified):
        return Envelope(code=payload.status_code, message=payload.message)
    return payload.value
