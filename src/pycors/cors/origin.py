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
"""Web origins as defined by RFC 6454.

Only hierarchical URLs and the ``null`` origin are modelled.  Opaque origins
(globally unique identifiers) are never equal to any other origin, so they are
reported as parse errors instead of being given a representation.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from pycors.kernel.exceptions import OriginParseError

DEFAULT_PORTS: dict[str, int] = {
    "ftp": 21,
    "gopher": 70,
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
}

NULL = "null"

# unreserved characters plus pct-encoding; commas and whitespace never appear in a single origin
_HOST_RE = re.compile(r"[a-z0-9._~%-]+")


@dataclass(frozen=True)
class Origin:
    """A ``(scheme, host, port)`` triple, or the null origin.

    Instances compare by triple: scheme and host are stored lower-cased (host
    IDNA-encoded) and the port is always explicit, so
    ``hTtP://user:pw@eXample.com:80/a.html`` equals ``http://example.com``.
    """

    scheme: str | None
    host: str | None
    port: int | None

    @property
    def is_null(self) -> bool:
        return self.scheme is None

    @classmethod
    def parse(cls, value: str) -> Origin:
        """Parse *value* as a hierarchical origin.

        Raises:
            OriginParseError: if *value* is not an absolute URL, has no host,
                or uses a scheme without a known default port and no explicit
                port.
        """
        try:
            parts = urlsplit(value.strip())
            port = parts.port
        except ValueError as exc:
            raise OriginParseError(f"Could not be parsed as URL: '{value}'", value) from exc

        # Relative references have no origin
        if not parts.scheme:
            raise OriginParseError(f"Could not be parsed as URL: '{value}'", value)

        host = parts.hostname
        if not host:
            raise OriginParseError(f"No host in URL '{value}'", value)

        scheme = parts.scheme.lower()
        if port is None:
            port = DEFAULT_PORTS.get(scheme)
        if port is None:
            raise OriginParseError(f"Unsupported URL scheme '{scheme}'", value)

        return cls(scheme=scheme, host=_normalize_host(host, value), port=port)

    @classmethod
    def parse_allow_null(cls, value: str) -> Origin:
        """Like :meth:`parse`, but maps the literal ``"null"`` to :data:`NULL_ORIGIN`.

        Only use this where a null origin is not a security problem: ``null``
        means the browser could not (or would not) tell where the request
        came from.
        """
        if value == NULL:
            return NULL_ORIGIN
        return cls.parse(value)

    def __str__(self) -> str:
        if self.is_null:
            return NULL
        host = f"[{self.host}]" if self.host and ":" in self.host else self.host
        if DEFAULT_PORTS.get(self.scheme or "") == self.port:
            return f"{self.scheme}://{host}"
        return f"{self.scheme}://{host}:{self.port}"


NULL_ORIGIN = Origin(scheme=None, host=None, port=None)


def _normalize_host(host: str, value: str) -> str:
    host = host.lower()
    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError as exc:
            raise OriginParseError(f"Could not be parsed as URL: '{value}'", value) from exc

    # IP-literal (brackets already stripped) or a DNS-style reg-name
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError as exc:
            raise OriginParseError(f"Could not be parsed as URL: '{value}'", value) from exc
    elif not _HOST_RE.fullmatch(host):
        raise OriginParseError(f"Could not be parsed as URL: '{value}'", value)
    return host
