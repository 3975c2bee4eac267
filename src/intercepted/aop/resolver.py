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
"""DeclarationResolver — turns declared interceptor kinds into instances."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from intercepted.aop.contract import is_interceptor
from intercepted.aop.decorators import get_declared_interceptor_kinds
from intercepted.aop.registry import InterceptorKindRegistry, default_registry
from intercepted.kernel.exceptions import InstantiationError
from intercepted.logging.structlog_adapter import get_logger


class DeclarationResolver:
    """Instantiates the interceptor kinds declared on a class.

    Class kinds are built with their zero-argument constructor; string kinds
    go through the kind *registry*. Instances come back in declaration order,
    one per declaration (a kind declared twice yields two instances).
    """

    def __init__(self, registry: InterceptorKindRegistry | None = None, logger: Any = None) -> None:
        self._registry = registry if registry is not None else default_registry
        self._logger = logger if logger is not None else get_logger("intercepted.aop.resolver")

    @property
    def registry(self) -> InterceptorKindRegistry:
        return self._registry

    def resolve(self, target_type: type) -> list[Any]:
        """Return fresh interceptor instances for every declaration on *target_type*.

        Raises:
            InstantiationError: If any declared kind cannot be constructed.
                Nothing is returned for the other kinds in that case.
        """
        kinds = get_declared_interceptor_kinds(target_type)
        instances = [self._instantiate(target_type, kind) for kind in kinds]
        if instances:
            self._logger.debug(
                "declared_interceptors_resolved",
                target=target_type.__qualname__,
                kinds=[_kind_name(k) for k in kinds],
            )
        return instances

    def _instantiate(self, target_type: type, kind: type | str) -> Any:
        factory: Callable[[], Any] = self._registry.get(kind) if isinstance(kind, str) else kind
        name = _kind_name(kind)

        try:
            inspect.signature(factory).bind()
        except TypeError as exc:
            raise InstantiationError(
                f"Interceptor kind '{name}' declared on {target_type.__qualname__} "
                "has no zero-argument constructor",
                kind=kind,
                context={"target_type": target_type.__qualname__},
            ) from exc
        except ValueError:
            # No introspectable signature (builtin); construction decides.
            pass

        try:
            instance = factory()
        except Exception as exc:
            raise InstantiationError(
                f"Constructing interceptor kind '{name}' for {target_type.__qualname__} failed: {exc}",
                kind=kind,
                context={"target_type": target_type.__qualname__},
            ) from exc

        if not is_interceptor(instance):
            raise InstantiationError(
                f"Interceptor kind '{name}' produced {type(instance).__name__}, "
                "which does not implement the interceptor hooks",
                kind=kind,
                context={"target_type": target_type.__qualname__},
            )
        return instance


def _kind_name(kind: type | str) -> str:
    return kind if isinstance(kind, str) else kind.__qualname__
