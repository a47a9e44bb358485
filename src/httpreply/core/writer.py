# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the writer unit so this responsibility stays isolated, testable, and easy to evolve.

``ResponseWriter`` turns a semantic outcome (ok, not found, error, ...) into a
status code plus a JSON body written to a ``ResponseSink``.

Plain strings and exceptions are wrapped into ``{"code": ..., "message": ...}``;
any other payload is serialized as-is. One writer serves exactly one response
and is not safe to share between concurrent requests.
"""

from __future__ import annotations

import json
import logging
from http import HTTPStatus
from typing import Any, Callable, Dict, Optional

from fastapi.encoders import jsonable_encoder

from httpreply.core.config import WriterConfig
from httpreply.core.sinks import ResponseSink
from httpreply.models.envelope import Envelope
from httpreply.utils.payloads import Classified, Fault, Text, classify, to_body

logger = logging.getLogger(__name__)

ErrorHook = Callable[[Exception, Any], None]


class ResponseWriter:
    """Write JSON responses with a fixed status per outcome method."""

    def __init__(
        self,
        sink: ResponseSink,
        config: Optional[WriterConfig] = None,
        on_error: Optional[ErrorHook] = None,
    ):
        self.sink = sink
        self.config = config if config is not None else WriterConfig()
        self.on_error = on_error
        self._headers: Dict[str, str] = self.config.default_headers_with_content_type()

    # --------------- headers ---------------

    def _drop_default(self, key: str) -> None:
        lowered = key.lower()
        for name in [k for k in self._headers if k.lower() == lowered]:
            del self._headers[name]

    def _report_header_error(
        self, exc: UnicodeEncodeError, key: str, value: Any
    ) -> None:
        logger.warning("Skipping header %r: not latin-1 encodable: %s", key, exc)
        if self.on_error is not None:
            self.on_error(exc, value)

    def add_header(self, key: str, value: str) -> ResponseWriter:
        """Append a header value on the sink; existing values are kept.

        Header names and values must be latin-1 encodable. Anything else is
        logged, reported to ``on_error`` and skipped.
        """
        try:
            self.sink.headers.append(key, value)
        except UnicodeEncodeError as exc:
            self._report_header_error(exc, key, value)
            return self
        self._drop_default(key)
        return self

    def delete_header(self, key: str) -> ResponseWriter:
        """Remove every value of ``key``, including a pending default."""
        self._drop_default(key)
        try:
            del self.sink.headers[key]
        except UnicodeEncodeError as exc:
            # such a name can never have been stored on the sink
            self._report_header_error(exc, key, key)
        return self

    # --------------- core ---------------

    def _write_headers(self) -> None:
        for key, value in self._headers.items():
            try:
                self.sink.headers[key] = value
            except UnicodeEncodeError as exc:
                self._report_header_error(exc, key, value)

    def _encode(self, body: Any) -> bytes:
        content = json.dumps(
            jsonable_encoder(body),
            ensure_ascii=self.config.ensure_ascii,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        )
        if self.config.trailing_newline:
            content += "\n"
        return content.encode("utf-8")

    def _write_response(self, status_code: int, payload: Any) -> None:
        status_code = int(status_code)
        self._write_headers()
        self.sink.write_header(status_code)

        if payload is None:
            return

        body = to_body(classify(payload), status_code)
        try:
            data = self._encode(body)
        except Exception as exc:
            # Status and headers are already committed; the body is best effort.
            logger.warning(
                "Dropping unserializable %s body for status %s: %s",
                type(payload).__name__,
                status_code,
                exc,
            )
            if self.on_error is not None:
                self.on_error(exc, payload)
            return
        self.sink.write(data)

    # --------------- success family ---------------

    def success(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.OK, payload)

    def ok(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.OK, payload)

    def created(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.CREATED, payload)

    def accepted(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.ACCEPTED, payload)

    def no_content(self, payload: Any = None) -> None:
        """Write 204 with no body; ``payload`` is ignored."""
        self._write_response(HTTPStatus.NO_CONTENT, None)

    # --------------- error family ---------------

    def bad_request(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.BAD_REQUEST, payload)

    def unauthorized(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.UNAUTHORIZED, payload)

    def forbidden(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.FORBIDDEN, payload)

    def not_found(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.NOT_FOUND, payload)

    def method_not_allowed(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.METHOD_NOT_ALLOWED, payload)

    def unprocessable_entity(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.UNPROCESSABLE_ENTITY, payload)

    def too_many_requests(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.TOO_MANY_REQUESTS, payload)

    def internal_server_error(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.INTERNAL_SERVER_ERROR, payload)

    def service_unavailable(self, payload: Any = None) -> None:
        self._write_response(HTTPStatus.SERVICE_UNAVAILABLE, payload)

    def error(self, payload: Any = None) -> None:
        """Classify ``payload`` into a status and message, then write the envelope.

        Objects exposing ``status_code`` and ``message`` supply both. Strings
        and exceptions become a 500 with their text. Anything else, ``None``
        included, becomes a 500 with the standard reason phrase.
        """
        kind = classify(payload, honour_capability=True)
        status_code = int(HTTPStatus.INTERNAL_SERVER_ERROR)
        if isinstance(kind, Classified):
            status_code, message = kind.status_code, kind.message
        elif isinstance(kind, Text):
            message = kind.text
        elif isinstance(kind, Fault):
            message = str(kind.error)
        else:
            message = HTTPStatus.INTERNAL_SERVER_ERROR.phrase

        self._write_response(status_code, Envelope(code=status_code, message=message))
