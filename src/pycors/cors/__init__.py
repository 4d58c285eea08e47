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
"""pycors CORS — policy engine: origins, classification, preflight and decoration."""

from pycors.cors.classifier import ClassifiedRequest, RequestClassifier, RequestKind
from pycors.cors.decision import Authorized, CorsDecision, Rejected, RejectionReason
from pycors.cors.decorator import ResponseDecorator
from pycors.cors.interceptor import CorsInterceptor, Interception
from pycors.cors.matcher import OriginMatcher
from pycors.cors.origin import NULL_ORIGIN, Origin
from pycors.cors.policy import (
    STANDARD_METHODS,
    AllowedOrigins,
    AnyOrigin,
    ExactSet,
    PolicyConfig,
    Predicate,
)
from pycors.cors.preflight import PreflightResponder, PreflightResponse
from pycors.cors.properties import CorsProperties
from pycors.cors.tokens import TokenSet

__all__ = [
    "NULL_ORIGIN",
    "STANDARD_METHODS",
    "AllowedOrigins",
    "AnyOrigin",
    "Authorized",
    "ClassifiedRequest",
    "CorsDecision",
    "CorsInterceptor",
    "CorsProperties",
    "ExactSet",
    "Interception",
    "Origin",
    "OriginMatcher",
    "PolicyConfig",
    "Predicate",
    "PreflightResponder",
    "PreflightResponse",
    "Rejected",
    "RejectionReason",
    "RequestClassifier",
    "RequestKind",
    "ResponseDecorator",
    "TokenSet",
]
