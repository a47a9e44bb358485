# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Uniform JSON responses for HTTP handlers.

Typical use inside a FastAPI route::

    sink = BufferedSink()
    ResponseWriter(sink).not_found("no such chapter")
    return sink.to_response()
"""

from httpreply.core.config import WriterConfig, get_writer_config, load_writer_config
from httpreply.core.sinks import BufferedSink, ResponseSink
from httpreply.core.writer import ResponseWriter
from httpreply.models.envelope import Envelope
from httpreply.services.exceptions import ServiceError
from httpreply.utils.payloads import StatusMessage

__all__ = [
    "BufferedSink",
    "Envelope",
    "ResponseSink",
    "ResponseWriter",
    "ServiceError",
    "StatusMessage",
    "WriterConfig",
    "get_writer_config",
    "load_writer_config",
]
