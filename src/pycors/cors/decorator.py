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
"""ResponseDecorator — adds CORS headers to responses of actual cross-origin requests."""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, TypeVar

import structlog

from pycors.cors.classifier import ClassifiedRequest, parse_header_list
from pycors.cors.decision import (
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_EXPOSE_HEADERS,
    VARY,
    Authorized,
    CorsDecision,
    Rejected,
    RejectionReason,
)
from pycors.cors.matcher import OriginMatcher
from pycors.cors.policy import WILDCARD, PolicyConfig

logger = structlog.get_logger("pycors.cors.decorator")

H = TypeVar("H", bound=MutableMapping[str, Any])


class ResponseDecorator:
    """Grants (or silently withholds) access to a handler's response.

    Runs after the downstream handler and never blocks it: an unauthorized
    origin only means the browser will not expose the response.
    """

    def __init__(self, policy: PolicyConfig, matcher: OriginMatcher | None = None) -> None:
        self._policy = policy
        self._matcher = matcher or OriginMatcher(policy)

    def decide(self, classified: ClassifiedRequest) -> CorsDecision:
        if not classified.is_actual or classified.origin is None:
            raise ValueError(f"Not an actual cross-origin request: {classified.kind.value}")

        policy = self._policy
        if not self._matcher.matches(classified.origin):
            return Rejected(
                RejectionReason.DISALLOWED_ORIGIN,
                f"Request from disallowed origin '{classified.origin}'",
            )

        headers: list[tuple[str, str]] = [
            (ACCESS_CONTROL_ALLOW_ORIGIN, self._matcher.allow_origin_value(classified.origin)),
        ]
        if policy.allow_credentials:
            headers.append((ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"))
        if policy.exposed_headers:
            headers.append((ACCESS_CONTROL_EXPOSE_HEADERS, ", ".join(policy.exposed_headers)))
        headers.append((VARY, "Origin"))
        return Authorized(tuple(headers))

    def decorate(self, classified: ClassifiedRequest, headers: H) -> H:
        """Apply the decision to *headers* in place and return them.

        *headers* must be a case-insensitive header mapping (e.g. Starlette's
        ``MutableHeaders``).  Applying twice yields the same headers.
        """
        decision = self.decide(classified)
        if isinstance(decision, Rejected):
            logger.debug("cors_origin_not_allowed", origin=classified.origin)
            return headers

        for name, value in decision.headers_to_add:
            if name == VARY:
                merge_vary(headers, value)
            else:
                headers[name] = value
        return headers


def merge_vary(headers: MutableMapping[str, Any], *names: str) -> None:
    """Add *names* to ``Vary``, keeping existing tokens and folding repeated fields."""
    if hasattr(headers, "getlist"):
        existing = list(headers.getlist(VARY))
    else:
        existing = [headers[VARY]] if VARY in headers else []

    tokens = list(parse_header_list(existing))
    if WILDCARD in tokens:
        return

    present = {t.lower() for t in tokens}
    tokens.extend(n for n in names if n.lower() not in present)
    headers[VARY] = ", ".join(tokens)
