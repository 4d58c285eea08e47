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
"""Tests for CorsInterceptor — the two-hook wiring of the policy engine."""

from __future__ import annotations

from starlette.datastructures import MutableHeaders

from pycors.cors.classifier import RequestKind
from pycors.cors.interceptor import CorsInterceptor
from pycors.cors.policy import ExactSet, PolicyConfig
from pycors.web.ports.interceptor import HandlerInterceptor


class TestCorsInterceptorConformance:
    def test_implements_handler_interceptor(self):
        assert isinstance(CorsInterceptor(), HandlerInterceptor)

    def test_defaults_to_permissive_policy(self):
        assert CorsInterceptor().policy == PolicyConfig.permissive()


class TestPreHandle:
    def test_preflight_short_circuits(self):
        interception = CorsInterceptor().pre_handle(
            "OPTIONS", {"Origin": "http://foo", "Access-Control-Request-Method": "PUT"}
        )
        assert interception.short_circuit
        assert interception.response.status_code == 200

    def test_rejected_preflight_still_short_circuits(self):
        interceptor = CorsInterceptor(PolicyConfig(allowed_origins=ExactSet(["http://bar"])))
        interception = interceptor.pre_handle(
            "OPTIONS", {"Origin": "http://foo", "Access-Control-Request-Method": "PUT"}
        )
        assert interception.short_circuit
        assert interception.response.status_code == 403

    def test_actual_request_continues(self):
        interception = CorsInterceptor().pre_handle("GET", {"Origin": "http://foo"})
        assert not interception.short_circuit
        assert interception.classified.kind is RequestKind.ACTUAL


class TestPostHandle:
    def test_decorates_actual_request(self):
        interceptor = CorsInterceptor()
        interception = interceptor.pre_handle("GET", {"Origin": "http://foo"})
        headers = MutableHeaders()

        interceptor.post_handle(interception, headers)

        assert headers["Access-Control-Allow-Origin"] == "*"

    def test_ignores_non_cors_request(self):
        interceptor = CorsInterceptor()
        interception = interceptor.pre_handle("GET", {})
        headers = MutableHeaders()

        interceptor.post_handle(interception, headers)

        assert list(headers.items()) == []
