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
"""PreflightResponder — answers CORS preflight requests without reaching the handler."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pycors.cors.classifier import ClassifiedRequest
from pycors.cors.decision import (
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_HEADERS,
    ACCESS_CONTROL_ALLOW_METHODS,
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_MAX_AGE,
    VARY,
    Authorized,
    CorsDecision,
    Rejected,
    RejectionReason,
)
from pycors.cors.matcher import OriginMatcher
from pycors.cors.policy import WILDCARD, PolicyConfig

logger = structlog.get_logger("pycors.cors.preflight")

PREFLIGHT_OK = 200
PREFLIGHT_REJECTED = 403


@dataclass(frozen=True)
class PreflightResponse:
    """Terminal response for a preflight: status, headers and an empty body."""

    status_code: int
    headers: tuple[tuple[str, str], ...]
    body: bytes = b""

    def header(self, name: str) -> str | None:
        """Case-insensitive single-value lookup."""
        name = name.lower()
        for key, value in self.headers:
            if key.lower() == name:
                return value
        return None


class PreflightResponder:
    """Validates a preflight against the policy and builds the response.

    Checks run origin, method, then headers; the first failure rejects the
    whole preflight.  On success the full configured method and header lists
    are returned so the browser can cache them for ``max_age`` seconds.
    """

    def __init__(self, policy: PolicyConfig, matcher: OriginMatcher | None = None) -> None:
        self._policy = policy
        self._matcher = matcher or OriginMatcher(policy)

    def decide(self, classified: ClassifiedRequest) -> CorsDecision:
        if not classified.is_preflight or classified.origin is None:
            raise ValueError(f"Not a preflight request: {classified.kind.value}")

        policy = self._policy
        origin = classified.origin

        if not self._matcher.matches(origin):
            return Rejected(
                RejectionReason.DISALLOWED_ORIGIN,
                f"Preflight request requesting disallowed origin '{origin}'",
            )

        method = classified.requested_method or ""
        if method not in policy.allowed_methods:
            return Rejected(
                RejectionReason.DISALLOWED_METHOD,
                f"Preflight request requesting disallowed method {method}",
            )

        if policy.allowed_headers is not None:
            missing = policy.allowed_headers.missing(classified.requested_headers)
            if missing:
                return Rejected(
                    RejectionReason.DISALLOWED_HEADERS,
                    f"Preflight request requesting disallowed header(s) {', '.join(missing)}",
                )

        headers: list[tuple[str, str]] = [
            (ACCESS_CONTROL_ALLOW_ORIGIN, self._matcher.allow_origin_value(origin)),
        ]
        if policy.allow_credentials:
            headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))
        headers.append((ACCESS_CONTROL_ALLOW_METHODS, policy.allowed_methods.joined()))

        allow_headers = self._allow_headers_value(classified)
        if allow_headers:
            headers.append((ACCESS_CONTROL_ALLOW_HEADERS, allow_headers))
        if policy.max_age is not None:
            headers.append((ACCESS_CONTROL_MAX_AGE, str(policy.max_age)))
        headers.append((VARY, "Origin"))
        return Authorized(tuple(headers))

    def respond(self, classified: ClassifiedRequest) -> PreflightResponse:
        decision = self.decide(classified)
        if isinstance(decision, Rejected):
            logger.info(
                "cors_preflight_rejected",
                reason=decision.reason.value,
                origin=classified.origin,
                detail=decision.detail,
            )
            return PreflightResponse(status_code=PREFLIGHT_REJECTED, headers=((VARY, "Origin"),))

        logger.debug(
            "cors_preflight_authorized",
            origin=classified.origin,
            method=classified.requested_method,
        )
        return PreflightResponse(status_code=PREFLIGHT_OK, headers=decision.headers_to_add)

    def _allow_headers_value(self, classified: ClassifiedRequest) -> str:
        policy = self._policy
        if policy.allowed_headers is not None:
            return policy.allowed_headers.joined()
        # Unrestricted: '*' is not honoured by browsers for credentialed requests
        if policy.allow_credentials:
            return ", ".join(classified.requested_headers)
        return WILDCARD
