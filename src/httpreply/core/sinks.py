# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the sinks unit so this responsibility stays isolated, testable, and easy to evolve.

A sink is the framework-side target a ``ResponseWriter`` writes into: a header
multimap, a status code that is set once, and a body byte stream.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

logger = logging.getLogger(__name__)


@runtime_checkable
class ResponseSink(Protocol):
    headers: MutableHeaders

    def write_header(self, status_code: int) -> None: ...

    def write(self, data: bytes) -> int: ...


class BufferedSink:
    """In-memory sink that records headers, status and body.

    The first status code written wins. Writing body bytes before any status
    commits 200, matching what HTTP servers do for an implicit status line.
    """

    def __init__(self, headers: Optional[MutableHeaders] = None):
        self.headers = headers if headers is not None else MutableHeaders()
        self._status_code: Optional[int] = None
        self._body = bytearray()

    @property
    def status_code(self) -> Optional[int]:
        return self._status_code

    @property
    def body(self) -> bytes:
        return bytes(self._body)

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    def write_header(self, status_code: int) -> None:
        if self._status_code is not None:
            logger.warning(
                "Ignoring superfluous status %s; response already committed with %s",
                status_code,
                self._status_code,
            )
            return
        self._status_code = status_code

    def write(self, data: bytes) -> int:
        if self._status_code is None:
            self.write_header(200)
        self._body.extend(data)
        return len(data)

    def to_response(self) -> Response:
        """Build a Starlette response carrying every recorded header value."""
        response = Response(
            content=bytes(self._body),
            status_code=self._status_code if self._status_code is not None else 200,
        )
        response.raw_headers.extend(self.headers.raw)
        return response
