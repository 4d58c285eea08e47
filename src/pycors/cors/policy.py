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
"""CORS policy — the immutable, validated description of cross-origin behaviour.

A :class:`PolicyConfig` is built once at startup and shared by reference with
every request; nothing mutates it afterwards.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from pycors.cors.origin import Origin
from pycors.cors.tokens import TokenSet
from pycors.kernel.exceptions import ConfigError, OriginParseError

if TYPE_CHECKING:
    from pycors.cors.properties import CorsProperties

WILDCARD = "*"

STANDARD_METHODS: tuple[str, ...] = (
    "OPTIONS",
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "HEAD",
    "TRACE",
    "CONNECT",
    "PATCH",
)


# =============================================================================
# Origin rules
# =============================================================================


@dataclass(frozen=True)
class AnyOrigin:
    """Authorize every well-formed origin.

    "Every origin" deliberately stops short of ``null``: with the defaults,
    ``Origin: null`` is rejected (no allow headers on actual requests, 403 on
    preflights), including under :meth:`PolicyConfig.permissive`.  Set
    ``allow_null=True`` to admit it.

    Attributes:
        echo: Reflect the request origin instead of emitting ``*``.  Required
            when credentials are allowed.
        allow_null: Also authorize the ``null`` origin.  Off by default since
            sandboxed documents and ``file:`` pages all share it.
    """

    echo: bool = False
    allow_null: bool = False


@dataclass(frozen=True, init=False)
class ExactSet:
    """Authorize only the listed origins (RFC 6454 equality).

    Entries may be :class:`Origin` values or strings; the literal ``"null"``
    opts the null origin in.
    """

    origins: frozenset[Origin] = frozenset()

    def __init__(self, origins: Iterable[Origin | str] = ()) -> None:
        if isinstance(origins, str):
            origins = [origins]
        try:
            entries = list(origins)
        except TypeError as exc:
            raise ConfigError("ExactSet expects an iterable of origins", context={"origins": repr(origins)}) from exc

        parsed: set[Origin] = set()
        for entry in entries:
            if isinstance(entry, Origin):
                parsed.add(entry)
                continue
            if not isinstance(entry, str):
                raise ConfigError("Allowed origins must be strings or Origin values", context={"origin": repr(entry)})
            if entry.strip() == WILDCARD:
                raise ConfigError(
                    "'*' is not an origin; use AnyOrigin to allow every origin",
                    context={"origin": entry},
                )
            try:
                parsed.add(Origin.parse_allow_null(entry.strip()))
            except OriginParseError as exc:
                raise ConfigError(f"Invalid allowed origin: {exc}", context={"origin": entry}) from exc
        object.__setattr__(self, "origins", frozenset(parsed))

    def __contains__(self, origin: object) -> bool:
        return origin in self.origins


@dataclass(frozen=True)
class Predicate:
    """Authorize origins for which ``func(origin)`` returns ``True``."""

    func: Callable[[Origin], bool]


AllowedOrigins = AnyOrigin | ExactSet | Predicate


# =============================================================================
# Policy
# =============================================================================


@dataclass(frozen=True)
class PolicyConfig:
    """Configuration for Cross-Origin Resource Sharing.

    Defaults are the permissive preset: any origin (answered with ``*``),
    every standard method, no restriction on request headers, no credentials.

    ``allowed_headers=None`` (or a ``"*"`` entry) lifts the restriction on
    ``Access-Control-Request-Headers``.

    Raises:
        ConfigError: when the combination cannot be served, e.g. credentials
            together with a literal ``*`` origin.
    """

    allowed_origins: AllowedOrigins = field(default_factory=AnyOrigin)
    allowed_methods: Any = STANDARD_METHODS
    allowed_headers: Any = None
    exposed_headers: Any = ()
    allow_credentials: bool = False
    max_age: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.allowed_origins, (AnyOrigin, ExactSet, Predicate)):
            raise ConfigError(
                "allowed_origins must be AnyOrigin, ExactSet or Predicate",
                context={"allowed_origins": repr(self.allowed_origins)},
            )

        methods = TokenSet.methods(_tokens("allowed_methods", self.allowed_methods))
        object.__setattr__(self, "allowed_methods", methods)

        headers: TokenSet | None = None
        if self.allowed_headers is not None:
            names = _tokens("allowed_headers", self.allowed_headers)
            if WILDCARD not in names:
                headers = TokenSet(names)
        object.__setattr__(self, "allowed_headers", headers)

        exposed = tuple(TokenSet(_tokens("exposed_headers", self.exposed_headers)))
        object.__setattr__(self, "exposed_headers", exposed)

        if self.max_age is not None and (
            isinstance(self.max_age, bool) or not isinstance(self.max_age, int) or self.max_age < 0
        ):
            raise ConfigError("max_age must be a non-negative number of seconds", context={"max_age": self.max_age})

        if self.allow_credentials:
            if isinstance(self.allowed_origins, AnyOrigin) and not self.allowed_origins.echo:
                raise ConfigError(
                    "Credentials cannot be allowed with a literal '*' origin; use AnyOrigin(echo=True)",
                )
            if WILDCARD in exposed:
                raise ConfigError("Credentials cannot be allowed with '*' in exposed_headers")

    @property
    def allows_any_header(self) -> bool:
        return self.allowed_headers is None

    @classmethod
    def permissive(cls, allow_credentials: bool = False, max_age: int | None = None) -> PolicyConfig:
        """Zero-config preset.

        Every origin, every standard method, any request header.  With
        credentials, the request origin is echoed instead of ``*``.
        """
        return cls(
            allowed_origins=AnyOrigin(echo=allow_credentials),
            allowed_methods=STANDARD_METHODS,
            allowed_headers=None,
            allow_credentials=allow_credentials,
            max_age=max_age,
        )

    @classmethod
    def from_properties(cls, props: CorsProperties) -> PolicyConfig:
        """Build a policy from bound ``pycors.cors.*`` configuration."""
        origins: AllowedOrigins
        if WILDCARD in props.allowed_origins:
            origins = AnyOrigin(echo=props.echo_origin, allow_null=props.allow_null_origin)
        else:
            origins = ExactSet(props.allowed_origins)
        return cls(
            allowed_origins=origins,
            allowed_methods=props.allowed_methods,
            allowed_headers=props.allowed_headers,
            exposed_headers=props.exposed_headers,
            allow_credentials=props.allow_credentials,
            max_age=props.max_age,
        )


def _tokens(name: str, value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    try:
        tokens = list(value)
    except TypeError as exc:
        raise ConfigError(f"{name} must be a list of strings", context={name: repr(value)}) from exc
    for token in tokens:
        if not isinstance(token, str) or not token.strip():
            raise ConfigError(f"{name} entries must be non-empty strings", context={name: tokens})
    return [t.strip() for t in tokens]
