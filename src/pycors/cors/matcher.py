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
"""OriginMatcher — decides whether a request origin is authorized."""

from __future__ import annotations

from pycors.cors.origin import Origin
from pycors.cors.policy import WILDCARD, AnyOrigin, ExactSet, PolicyConfig
from pycors.kernel.exceptions import OriginParseError


class OriginMatcher:
    """Applies a policy's origin rule to ``Origin`` header values.

    Pure function of the policy and the origin: safe to share between
    concurrent requests.
    """

    def __init__(self, policy: PolicyConfig) -> None:
        self._policy = policy
        self._rule = policy.allowed_origins

    def matches(self, origin: str | Origin) -> bool:
        """Return ``True`` if *origin* is authorized.

        Raw header values that are not valid origins never match.
        """
        if isinstance(origin, str):
            try:
                origin = Origin.parse_allow_null(origin.strip())
            except OriginParseError:
                return False

        rule = self._rule
        if isinstance(rule, ExactSet):
            return origin in rule
        if isinstance(rule, AnyOrigin):
            return rule.allow_null or not origin.is_null
        return bool(rule.func(origin))

    def allow_origin_value(self, request_origin: str) -> str:
        """Value for ``Access-Control-Allow-Origin`` once *request_origin* is authorized."""
        rule = self._rule
        if isinstance(rule, AnyOrigin) and not rule.echo and not self._policy.allow_credentials:
            return WILDCARD
        return request_origin.strip()
