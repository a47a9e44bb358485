# Copyright (C) 2026 StableLlama
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

import json
import os
import tempfile
from pathlib import Path
from unittest import TestCase
from unittest.mock import patch

from pydantic import ValidationError

from httpreply.core.config import (
    WriterConfig,
    get_writer_config,
    load_json_file,
    load_writer_config,
)


class WriterConfigLoaderTest(TestCase):
    def test_defaults_without_file_or_env(self):
        cfg = get_writer_config()
        self.assertEqual(cfg.content_type, "application/json")
        self.assertEqual(cfg.default_headers, {})
        self.assertFalse(cfg.ensure_ascii)
        self.assertTrue(cfg.trailing_newline)
        self.assertEqual(
            cfg.default_headers_with_content_type(),
            {"Content-Type": "application/json"},
        )

    def test_env_overrides_file_and_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "httpreply.json"
            cfg_path.write_text(
                json.dumps(
                    {
                        "content_type": "application/vnd.api+json",
                        "ensure_ascii": False,
                        "default_headers": {"X-Service": "${SERVICE_NAME}"},
                    }
                ),
                encoding="utf-8",
            )
            env = {
                "SERVICE_NAME": "chapters",
                "HTTPREPLY_ENSURE_ASCII": "yes",
            }
            with patch.dict(os.environ, env):
                cfg = load_writer_config(
                    cfg_path, defaults={"trailing_newline": False}
                )

        self.assertEqual(cfg["content_type"], "application/vnd.api+json")
        self.assertEqual(cfg["default_headers"], {"X-Service": "chapters"})
        self.assertTrue(cfg["ensure_ascii"])
        self.assertFalse(cfg["trailing_newline"])

    def test_config_path_from_env(self):
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "httpreply.json"
            cfg_path.write_text(
                json.dumps({"default_headers": {"Cache-Control": "no-store"}}),
                encoding="utf-8",
            )
            with patch.dict(os.environ, {"HTTPREPLY_CONFIG": str(cfg_path)}):
                cfg = get_writer_config()
        self.assertEqual(cfg.default_headers, {"Cache-Control": "no-store"})

    def test_content_type_env_override(self):
        with patch.dict(
            os.environ, {"HTTPREPLY_CONTENT_TYPE": "application/json; charset=utf-8"}
        ):
            cfg = get_writer_config()
        self.assertEqual(
            cfg.default_headers_with_content_type()["Content-Type"],
            "application/json; charset=utf-8",
        )

    def test_unset_placeholder_is_left_alone(self):
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "httpreply.json"
            cfg_path.write_text(
                json.dumps({"default_headers": {"X-Env": "${HTTPREPLY_TEST_UNSET}"}}),
                encoding="utf-8",
            )
            cfg = load_writer_config(cfg_path)
        self.assertEqual(cfg["default_headers"]["X-Env"], "${HTTPREPLY_TEST_UNSET}")

    def test_invalid_boolean_env_raises(self):
        with patch.dict(os.environ, {"HTTPREPLY_TRAILING_NEWLINE": "maybe"}):
            with self.assertRaises(ValueError):
                load_writer_config()

    def test_malformed_json_raises(self):
        with tempfile.TemporaryDirectory() as td:
            cfg_path = Path(td) / "broken.json"
            cfg_path.write_text("{not-json", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_json_file(cfg_path)

    def test_missing_file_is_empty(self):
        self.assertEqual(load_json_file("/nonexistent/httpreply.json"), {})
        self.assertEqual(load_json_file(None), {})

    def test_invalid_values_fail_validation(self):
        with self.assertRaises(ValidationError):
            WriterConfig.model_validate({"default_headers": ["not", "a", "map"]})
