# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for StructlogAdapter — the CORS decision log."""

import io
import json
import logging

import pytest
import structlog

from pycors.core.config import Config
from pycors.cors.classifier import RequestClassifier
from pycors.cors.policy import ExactSet, PolicyConfig
from pycors.cors.preflight import PreflightResponder
from pycors.logging.port import LoggingPort
from pycors.logging.structlog_adapter import StructlogAdapter, escape_request_values


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    for name in ("pycors.cors", "pycors.cors.preflight", "pycors.level_test"):
        logging.getLogger(name).setLevel(logging.NOTSET)


def _configured(data: dict, stream: io.StringIO) -> StructlogAdapter:
    adapter = StructlogAdapter(stream=stream)
    adapter.configure(Config({"pycors": {"logging": data}}))
    return adapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter(stream=io.StringIO())
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.format == "console"
        assert adapter.logger_levels == {"pycors.cors": "INFO"}

    def test_root_level_sets_cors_default(self):
        adapter = _configured({"level": {"root": "warning"}}, io.StringIO())
        assert adapter.root_level == "WARNING"
        assert logging.getLogger("pycors.cors").level == logging.WARNING

    def test_root_level_env_override(self, monkeypatch):
        monkeypatch.setenv("PYCORS_LOGGING_LEVEL_ROOT", "error")
        adapter = _configured({"level": {"root": "DEBUG"}}, io.StringIO())
        assert adapter.root_level == "ERROR"

    def test_explicit_cors_level_wins(self):
        adapter = _configured({"level": {"root": "INFO", "pycors.cors": "debug"}}, io.StringIO())
        assert adapter.logger_levels["pycors.cors"] == "DEBUG"
        assert logging.getLogger("pycors.cors").level == logging.DEBUG

    def test_nested_levels_are_flattened(self):
        adapter = _configured({"level": {"pycors": {"cors": {"preflight": "warning"}}}}, io.StringIO())
        assert adapter.logger_levels["pycors.cors.preflight"] == "WARNING"

    def test_unknown_format_falls_back_to_console(self):
        adapter = _configured({"format": "xml"}, io.StringIO())
        assert adapter.format == "console"

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("pycors.level_test", "LOUD")
        assert logging.getLogger("pycors.level_test").level == logging.INFO


class TestDecisionLog:
    def test_rejected_preflight_is_logged_as_json(self):
        stream = io.StringIO()
        _configured({"format": "json"}, stream)
        responder = PreflightResponder(PolicyConfig(allowed_origins=ExactSet(["https://a.com"])))
        classified = RequestClassifier().classify(
            "OPTIONS", {"Origin": "https://evil.com", "Access-Control-Request-Method": "GET"}
        )

        responder.respond(classified)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "cors_preflight_rejected"
        assert record["logger"] == "pycors.cors.preflight"
        assert record["level"] == "info"
        assert record["reason"] == "disallowed_origin"
        assert record["origin"] == "https://evil.com"

    def test_level_filters_debug_events(self):
        stream = io.StringIO()
        _configured({"format": "json", "level": {"pycors.cors": "INFO"}}, stream)
        responder = PreflightResponder(PolicyConfig.permissive())
        classified = RequestClassifier().classify(
            "OPTIONS", {"Origin": "https://a.com", "Access-Control-Request-Method": "GET"}
        )

        responder.respond(classified)

        assert "cors_preflight_authorized" not in stream.getvalue()

    def test_logfmt_format(self):
        stream = io.StringIO()
        adapter = _configured({"format": "logfmt"}, stream)
        adapter.get_logger("pycors.cors.test").info("cors_policy_loaded", max_age=600)
        line = stream.getvalue().strip()
        assert "event=cors_policy_loaded" in line
        assert "max_age=600" in line


class TestEscapeRequestValues:
    def test_control_characters_are_escaped(self):
        event = escape_request_values(None, "info", {"event": "x", "origin": "http://a.com\nforged=1"})
        assert event["origin"] == "http://a.com\\x0aforged=1"

    def test_other_keys_untouched(self):
        event = escape_request_values(None, "info", {"event": "line\n", "origin": "https://a.com"})
        assert event == {"event": "line\n", "origin": "https://a.com"}

    def test_forged_origin_stays_on_one_line(self):
        stream = io.StringIO()
        adapter = _configured({"format": "console"}, stream)
        adapter.get_logger("pycors.cors.test").info("cors_origin_not_allowed", origin="http://a.com\nFAKE")
        assert len(stream.getvalue().strip().splitlines()) == 1
