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
"""RequestClassifier — tells preflights, actual cross-origin requests and the rest apart."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"


class RequestKind(enum.Enum):
    PREFLIGHT = "preflight"
    ACTUAL = "actual"
    NOT_CORS = "not_cors"


@dataclass(frozen=True)
class ClassifiedRequest:
    """A request reduced to what CORS cares about.

    ``requested_method`` and ``requested_headers`` are only populated for
    preflights.
    """

    kind: RequestKind
    origin: str | None = None
    requested_method: str | None = None
    requested_headers: tuple[str, ...] = ()

    @property
    def is_preflight(self) -> bool:
        return self.kind is RequestKind.PREFLIGHT

    @property
    def is_actual(self) -> bool:
        return self.kind is RequestKind.ACTUAL


NOT_CORS_RELEVANT = ClassifiedRequest(kind=RequestKind.NOT_CORS)


class RequestClassifier:
    """Classifies requests from their method and headers.

    Rules, in order:

    1. No ``Origin`` header: not CORS relevant.
    2. ``OPTIONS`` with ``Access-Control-Request-Method``: preflight.
    3. Anything else: actual cross-origin request, including a plain
       ``OPTIONS`` call that carries an ``Origin``.
    """

    def classify(self, method: str, headers: Mapping[str, str] | Iterable[tuple[str, str]]) -> ClassifiedRequest:
        lookup = _normalize(headers)

        origins = lookup.get(ORIGIN.lower())
        if not origins:
            return NOT_CORS_RELEVANT
        origin = origins[0]

        requested = lookup.get(ACCESS_CONTROL_REQUEST_METHOD.lower())
        if method.upper() == "OPTIONS" and requested:
            return ClassifiedRequest(
                kind=RequestKind.PREFLIGHT,
                origin=origin,
                requested_method=requested[0].strip(),
                requested_headers=parse_header_list(lookup.get(ACCESS_CONTROL_REQUEST_HEADERS.lower(), [])),
            )

        return ClassifiedRequest(kind=RequestKind.ACTUAL, origin=origin)


def parse_header_list(values: Iterable[str]) -> tuple[str, ...]:
    """Split comma-separated header field values into trimmed, de-duplicated names."""
    seen: dict[str, str] = {}
    for value in values:
        for name in value.split(","):
            name = name.strip()
            if name and name.lower() not in seen:
                seen[name.lower()] = name
    return tuple(seen.values())


def _normalize(headers: Any) -> dict[str, list[str]]:
    # Starlette's Headers.items() yields repeated fields; plain dicts yield one each
    items = headers.items() if hasattr(headers, "items") else headers
    lookup: dict[str, list[str]] = {}
    for name, value in items:
        lookup.setdefault(name.lower(), []).append(value)
    return lookup
