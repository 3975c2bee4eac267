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
"""InterceptorKindRegistry — maps kind identifiers to interceptor factories."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from intercepted.kernel.exceptions import DuplicateInterceptorKindError, UnknownInterceptorKindError


class InterceptorKindRegistry:
    """Registry of named interceptor kinds, populated at import time.

    Lets a class declare an interceptor by identifier instead of importing
    the interceptor class::

        registry = InterceptorKindRegistry()
        registry.register("audit", AuditInterceptor)

        @intercepted_by("audit")
        class OrderService: ...
    """

    def __init__(self) -> None:
        self._factories: dict[str, Callable[[], Any]] = {}
        self._lock = threading.Lock()

    def register(self, kind_id: str, factory: Callable[[], Any]) -> None:
        """Register *factory* (a class or zero-argument callable) under *kind_id*."""
        with self._lock:
            if kind_id in self._factories:
                raise DuplicateInterceptorKindError(kind_id)
            self._factories[kind_id] = factory

    def unregister(self, kind_id: str) -> None:
        with self._lock:
            self._factories.pop(kind_id, None)

    def get(self, kind_id: str) -> Callable[[], Any]:
        """Return the factory for *kind_id*."""
        try:
            return self._factories[kind_id]
        except KeyError:
            raise UnknownInterceptorKindError(
                f"No interceptor kind registered under '{kind_id}'", kind=kind_id
            ) from None

    def create(self, kind_id: str) -> Any:
        """Build a fresh interceptor instance for *kind_id*."""
        return self.get(kind_id)()

    def kinds(self) -> list[str]:
        """Registered identifiers, in registration order."""
        return list(self._factories)

    def __contains__(self, kind_id: object) -> bool:
        return kind_id in self._factories

    def __len__(self) -> int:
        return len(self._factories)


default_registry = InterceptorKindRegistry()
