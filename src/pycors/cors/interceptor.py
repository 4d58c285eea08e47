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
"""CorsInterceptor — wires classification, preflight and decoration into two hooks."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pycors.cors.classifier import ClassifiedRequest, RequestClassifier
from pycors.cors.decorator import ResponseDecorator
from pycors.cors.matcher import OriginMatcher
from pycors.cors.policy import PolicyConfig
from pycors.cors.preflight import PreflightResponder, PreflightResponse


@dataclass(frozen=True)
class Interception:
    """Per-request state handed from ``pre_handle`` to ``post_handle``."""

    classified: ClassifiedRequest
    response: PreflightResponse | None = None

    @property
    def short_circuit(self) -> bool:
        return self.response is not None


class CorsInterceptor:
    """:class:`~pycors.web.ports.interceptor.HandlerInterceptor` for CORS.

    Holds only the immutable policy and stateless collaborators, so one
    instance serves any number of concurrent requests.
    """

    def __init__(self, policy: PolicyConfig | None = None) -> None:
        self.policy = policy or PolicyConfig.permissive()
        matcher = OriginMatcher(self.policy)
        self._classifier = RequestClassifier()
        self._preflight = PreflightResponder(self.policy, matcher)
        self._decorator = ResponseDecorator(self.policy, matcher)

    def pre_handle(self, method: str, headers: Mapping[str, str]) -> Interception:
        classified = self._classifier.classify(method, headers)
        if classified.is_preflight:
            return Interception(classified, self._preflight.respond(classified))
        return Interception(classified)

    def post_handle(self, interception: Interception, response_headers: Any) -> None:
        if interception.classified.is_actual:
            self._decorator.decorate(interception.classified, response_headers)
