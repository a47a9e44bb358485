# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

"""Defines the conftest unit so this responsibility stays isolated, testable, and easy to evolve."""

import os
import pytest

_HTTPREPLY_VARS = (
    "HTTPREPLY_CONFIG",
    "HTTPREPLY_CONTENT_TYPE",
    "HTTPREPLY_ENSURE_ASCII",
    "HTTPREPLY_TRAILING_NEWLINE",
)


@pytest.fixture(scope="session", autouse=True)
def session_clean_env():
    # A developer's shell settings must not leak into the default writer config.
    originals = {name: os.environ.pop(name, None) for name in _HTTPREPLY_VARS}

    yield

    for name, value in originals.items():
        if value is not None:
            os.environ[name] = value
        else:
            os.environ.pop(name, None)
