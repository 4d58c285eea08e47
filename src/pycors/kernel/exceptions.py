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
"""Unified exception hierarchy for pycors.

All library exceptions inherit from PyCorsException, carrying an optional
machine-readable code and a context dict for structured error data.

Categories:
- ConfigError: the CORS policy is internally inconsistent (fatal at startup)
- OriginParseError: an Origin value is not an RFC 6454 origin
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyCorsException(Exception):
    """Base exception for all pycors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CORS_CONFIG").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Policy Exceptions
# =============================================================================


class ConfigError(PyCorsException):
    """The CORS policy cannot be constructed as given.

    Raised at construction time only; a process holding a policy never sees
    this error while serving requests.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CORS_CONFIG", context=context)


# =============================================================================
# Request Exceptions
# =============================================================================


class OriginParseError(PyCorsException, ValueError):
    """The value cannot be interpreted as a web origin."""

    def __init__(self, message: str, value: str) -> None:
        super().__init__(message, code="CORS_ORIGIN", context={"value": value})
        self.value = value
