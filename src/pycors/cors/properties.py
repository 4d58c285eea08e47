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
"""CORS configuration properties (pycors.cors.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from pycors.core.config import config_properties
from pycors.cors.policy import STANDARD_METHODS


@config_properties(prefix="pycors.cors")
@dataclass
class CorsProperties:
    """Bindable form of :class:`~pycors.cors.policy.PolicyConfig`.

    ``allowed_origins: ["*"]`` selects ``AnyOrigin``; any other list is an
    exact set.  ``allowed_headers: ["*"]`` lifts the header restriction.
    """

    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    echo_origin: bool = False
    allow_null_origin: bool = False
    allowed_methods: list[str] = field(default_factory=lambda: list(STANDARD_METHODS))
    allowed_headers: list[str] = field(default_factory=lambda: ["*"])
    exposed_headers: list[str] = field(default_factory=list)
    allow_credentials: bool = False
    max_age: int | None = None
