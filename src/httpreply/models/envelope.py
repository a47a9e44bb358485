# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the envelope unit so this responsibility stays isolated, testable, and easy to evolve.

Pydantic model for the uniform ``{code, message}`` JSON body.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer


class Envelope(BaseModel):
    """Normalized body written for plain-text and error payloads.

    ``code`` is left out of the serialized form when it is zero.
    """

    code: int = Field(default=0, description="HTTP status code of the response")
    message: str

    @model_serializer(mode="wrap")
    def omit_zero_code(self, handler: SerializerFunctionWrapHandler) -> Any:
        data = handler(self)
        if isinstance(data, dict) and not data.get("code"):
            data.pop("code", None)
        return data
