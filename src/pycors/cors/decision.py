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
"""CorsDecision — outcome of checking a classified request against the policy."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"


class RejectionReason(enum.Enum):
    DISALLOWED_ORIGIN = "disallowed_origin"
    DISALLOWED_METHOD = "disallowed_method"
    DISALLOWED_HEADERS = "disallowed_headers"


@dataclass(frozen=True)
class Authorized:
    """The request may proceed; ``headers_to_add`` carry the permission."""

    headers_to_add: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class Rejected:
    """The browser must not be granted access.

    A normal outcome, not a fault: the caller withholds CORS headers.
    """

    reason: RejectionReason
    detail: str = ""


CorsDecision = Authorized | Rejected
