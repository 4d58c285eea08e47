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
"""pycors — Cross-Origin Resource Sharing for ASGI applications."""

from pycors.core.config import Config
from pycors.cors import (
    NULL_ORIGIN,
    AnyOrigin,
    CorsInterceptor,
    ExactSet,
    Origin,
    PolicyConfig,
    Predicate,
)
from pycors.kernel.exceptions import ConfigError, OriginParseError, PyCorsException
from pycors.web import CorsMiddleware, with_cors

__all__ = [
    "NULL_ORIGIN",
    "AnyOrigin",
    "Config",
    "ConfigError",
    "CorsInterceptor",
    "CorsMiddleware",
    "ExactSet",
    "Origin",
    "OriginParseError",
    "PolicyConfig",
    "Predicate",
    "PyCorsException",
    "with_cors",
]
