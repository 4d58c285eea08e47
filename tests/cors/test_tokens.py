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
"""Tests for the case-insensitive TokenSet."""

from pycors.cors.tokens import TokenSet


class TestTokenSet:
    def test_membership_is_case_insensitive(self):
        tokens = TokenSet(["Content-Type", "X-Requested-With"])
        assert "content-type" in tokens
        assert "X-REQUESTED-WITH" in tokens
        assert "Authorization" not in tokens

    def test_keeps_first_spelling_and_order(self):
        tokens = TokenSet(["X-B", "x-a", "X-b", " X-A "])
        assert list(tokens) == ["X-B", "x-a"]
        assert len(tokens) == 2

    def test_methods_are_upper_cased(self):
        tokens = TokenSet.methods(["get", "Post"])
        assert list(tokens) == ["GET", "POST"]
        assert "post" in tokens

    def test_missing_preserves_request_order(self):
        tokens = TokenSet(["Content-Type"])
        assert tokens.missing(["X-One", "content-type", "X-Two"]) == ["X-One", "X-Two"]

    def test_joined(self):
        assert TokenSet(["A", "B"]).joined() == "A, B"
        assert TokenSet().joined() == ""

    def test_equality_ignores_case(self):
        assert TokenSet(["a", "B"]) == TokenSet(["A", "b"])
        assert hash(TokenSet(["a"])) == hash(TokenSet(["A"]))

    def test_non_string_is_not_member(self):
        assert 1 not in TokenSet(["1"])
