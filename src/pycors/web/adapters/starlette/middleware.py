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
"""CORS middleware for Starlette — pure ASGI."""

from __future__ import annotations

from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Receive, Scope, Send

from pycors.core.config import Config
from pycors.cors.interceptor import CorsInterceptor
from pycors.cors.policy import PolicyConfig
from pycors.cors.properties import CorsProperties
from pycors.kernel.exceptions import ConfigError
from pycors.logging import LoggingPort, StructlogAdapter


class CorsMiddleware:
    """Applies a CORS policy around a downstream ASGI app.

    Preflights are answered here and never reach the app.  Responses to
    actual cross-origin requests get their headers decorated on
    ``http.response.start``.

    Pure ASGI (no ``BaseHTTPMiddleware``): only the ``http.response.start``
    message is touched, body messages stream through as sent.
    """

    def __init__(self, app: ASGIApp, policy: PolicyConfig | None = None) -> None:
        self.app = app
        self._interceptor = CorsInterceptor(policy)

    @property
    def policy(self) -> PolicyConfig:
        return self._interceptor.policy

    @classmethod
    def from_config(
        cls,
        app: ASGIApp,
        config: Config,
        logging_port: LoggingPort | None = None,
    ) -> CorsMiddleware:
        """Build the middleware from ``pycors.cors.*`` and ``pycors.logging.*``.

        Logging is set up through *logging_port* (a :class:`StructlogAdapter`
        by default) before the policy is bound, so configuration errors are
        reported through it as well.

        Raises:
            ConfigError: if the bound properties do not form a valid policy.
        """
        port = logging_port or StructlogAdapter()
        port.configure(config)
        log = port.get_logger("pycors.web")
        try:
            policy = PolicyConfig.from_properties(config.bind(CorsProperties))
        except ConfigError as exc:
            log.error("cors_config_invalid", error=str(exc), code=exc.code, context=exc.context)
            raise
        log.info(
            "cors_policy_loaded",
            origins=type(policy.allowed_origins).__name__,
            methods=policy.allowed_methods.joined(),
            credentials=policy.allow_credentials,
            max_age=policy.max_age,
        )
        return cls(app, policy)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        interception = self._interceptor.pre_handle(scope["method"], Headers(scope=scope))

        if interception.response is not None:
            preflight = interception.response
            response = Response(content=preflight.body, status_code=preflight.status_code)
            for name, value in preflight.headers:
                response.headers.append(name, value)
            await response(scope, receive, send)
            return

        if not interception.classified.is_actual:
            await self.app(scope, receive, send)
            return

        async def send_with_cors(message: Any) -> None:
            if message["type"] == "http.response.start":
                self._interceptor.post_handle(interception, MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_with_cors)


def with_cors(app: ASGIApp, policy: PolicyConfig | None = None, config: Config | None = None) -> CorsMiddleware:
    """Wrap *app* so every request goes through *policy* (permissive by default).

    With *config*, the policy and logging come from configuration instead
    (see :meth:`CorsMiddleware.from_config`).
    """
    if config is not None:
        if policy is not None:
            raise ConfigError("Pass either a policy or a config to with_cors, not both")
        return CorsMiddleware.from_config(app, config)
    return CorsMiddleware(app, policy)
