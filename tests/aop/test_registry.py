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
"""Tests for InterceptorKindRegistry."""

from __future__ import annotations

import pytest

from intercepted.aop.contract import Interceptor
from intercepted.aop.registry import InterceptorKindRegistry
from intercepted.kernel.exceptions import (
    DuplicateInterceptorKindError,
    InstantiationError,
    UnknownInterceptorKindError,
)


class AuditInterceptor(Interceptor):
    pass


class TestInterceptorKindRegistry:
    def test_register_and_create(self) -> None:
        registry = InterceptorKindRegistry()
        registry.register("audit", AuditInterceptor)

        first = registry.create("audit")
        second = registry.create("audit")
        assert isinstance(first, AuditInterceptor)
        assert first is not second

    def test_factory_functions_are_accepted(self) -> None:
        shared = AuditInterceptor()
        registry = InterceptorKindRegistry()
        registry.register("shared", lambda: shared)
        assert registry.create("shared") is shared

    def test_duplicate_registration_rejected(self) -> None:
        registry = InterceptorKindRegistry()
        registry.register("audit", AuditInterceptor)
        with pytest.raises(DuplicateInterceptorKindError) as exc_info:
            registry.register("audit", AuditInterceptor)
        assert exc_info.value.code == "INTERCEPTOR_KIND_DUPLICATE"

    def test_unknown_kind(self) -> None:
        registry = InterceptorKindRegistry()
        with pytest.raises(UnknownInterceptorKindError) as exc_info:
            registry.get("missing")
        assert isinstance(exc_info.value, InstantiationError)
        assert exc_info.value.kind == "missing"

    def test_unregister_and_kinds(self) -> None:
        registry = InterceptorKindRegistry()
        registry.register("a", AuditInterceptor)
        registry.register("b", AuditInterceptor)
        assert registry.kinds() == ["a", "b"]
        assert len(registry) == 2

        registry.unregister("a")
        registry.unregister("never-registered")
        assert registry.kinds() == ["b"]
        assert "a" not in registry
