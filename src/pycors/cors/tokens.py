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
"""Case-insensitive, order-preserving token sets for methods and header names."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator


class TokenSet:
    """Immutable ordered set of HTTP tokens compared ASCII case-insensitively.

    Lookups go through a lower-cased key so membership tests never repeat
    case folding on the stored side.  Each entry keeps a canonical spelling
    (the first one seen, passed through *canonicalize*), which is what gets
    emitted in response headers.
    """

    __slots__ = ("_tokens",)

    def __init__(
        self,
        tokens: Iterable[str] = (),
        canonicalize: Callable[[str], str] | None = None,
    ) -> None:
        normalized: dict[str, str] = {}
        for token in tokens:
            token = token.strip()
            if not token:
                continue
            key = token.lower()
            if key not in normalized:
                normalized[key] = canonicalize(token) if canonicalize else token
        self._tokens = normalized

    @classmethod
    def methods(cls, tokens: Iterable[str]) -> TokenSet:
        """Token set whose canonical spelling is upper case (HTTP methods)."""
        return cls(tokens, canonicalize=str.upper)

    def __contains__(self, token: object) -> bool:
        return isinstance(token, str) and token.strip().lower() in self._tokens

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens.values())

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenSet):
            return self._tokens.keys() == other._tokens.keys()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._tokens))

    def __repr__(self) -> str:
        return f"TokenSet({list(self)!r})"

    def missing(self, tokens: Iterable[str]) -> list[str]:
        """Return the tokens from *tokens* that are not members, in order."""
        return [t for t in tokens if t not in self]

    def joined(self) -> str:
        """Render as a header value (``"A, B, C"``)."""
        return ", ".join(self)
