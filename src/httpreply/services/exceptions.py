# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Error hierarchy whose members classify themselves into an HTTP outcome.

Purpose: Let application code raise an error that already knows its status
code and client-facing message. ``ResponseWriter.error`` (and the FastAPI
handler installed by ``install_error_handlers``) reads both through the
``status_code`` / ``message`` attributes instead of guessing from the type.
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception that carries an HTTP-equivalent status code and message.

    Any subclass satisfies the ``StatusMessage`` protocol, so passing one to
    ``ResponseWriter.error`` writes ``{"code": status_code, "message": message}``.
    """

    default_status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = (
            status_code if status_code is not None else self.default_status_code
        )


class BadRequestError(ServiceError):
    """Raised when the caller provides invalid or missing input (HTTP 400)."""

    default_status_code = 400


class UnauthorizedError(ServiceError):
    """Raised when credentials are missing or invalid (HTTP 401)."""

    default_status_code = 401


class ForbiddenError(ServiceError):
    """Raised when the caller may not perform the operation (HTTP 403)."""

    default_status_code = 403


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist (HTTP 404)."""

    default_status_code = 404


class ConflictError(ServiceError):
    """Raised when the request conflicts with the current resource state (HTTP 409)."""

    default_status_code = 409


class UnprocessableEntityError(ServiceError):
    """Raised when input is well-formed but semantically invalid (HTTP 422)."""

    default_status_code = 422


class RateLimitedError(ServiceError):
    """Raised when the caller has sent too many requests (HTTP 429)."""

    default_status_code = 429


class InternalError(ServiceError):
    """Raised when an unexpected internal failure occurs (HTTP 500)."""

    default_status_code = 500


class ServiceUnavailableError(ServiceError):
    """Raised when a dependency is temporarily down (HTTP 503)."""

    default_status_code = 503
