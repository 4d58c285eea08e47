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
"""HandlerInterceptor protocol — the two hook points a host framework must offer.

Uses generic ``Any`` types for headers so that vendor-specific types
(e.g. Starlette) remain confined to the adapter layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HandlerInterceptor(Protocol):
    """Around-handler contract.

    ``pre_handle`` runs before dispatch and may return a terminal response,
    in which case the handler is skipped.  ``post_handle`` runs after the
    handler produced a response and may mutate its headers.
    """

    def pre_handle(self, method: str, headers: Mapping[str, str]) -> Any:
        """Inspect the request.

        Returns:
            An interception record passed back to :meth:`post_handle`; its
            ``response`` attribute is set when dispatch must be skipped.
        """
        ...

    def post_handle(self, interception: Any, response_headers: Any) -> None:
        """Mutate the downstream response headers."""
        ...
