# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the http responses unit so this responsibility stays isolated, testable, and easy to evolve.

FastAPI glue: route handlers return the Starlette ``Response`` produced by a
``ResponseWriter`` writing into a ``BufferedSink``.
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from starlette.responses import Response

from httpreply.core.config import WriterConfig
from httpreply.core.sinks import BufferedSink
from httpreply.core.writer import ResponseWriter
from httpreply.services.exceptions import ServiceError


def ok_json(payload: Any = None, config: Optional[WriterConfig] = None) -> Response:
    sink = BufferedSink()
    ResponseWriter(sink, config).ok(payload)
    return sink.to_response()


def error_json(payload: Any = None, config: Optional[WriterConfig] = None) -> Response:
    sink = BufferedSink()
    ResponseWriter(sink, config).error(payload)
    return sink.to_response()


def install_error_handlers(app: FastAPI, config: Optional[WriterConfig] = None) -> None:
    """Render every uncaught ``ServiceError`` as a ``{code, message}`` envelope."""

    @app.exception_handler(ServiceError)
    async def _service_error_handler(_request: Request, exc: ServiceError) -> Response:
        return error_json(exc, config)
