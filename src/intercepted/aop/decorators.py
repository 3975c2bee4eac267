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
"""AOP decorators — @intercepted_by declarations and @interceptor_kind registration."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from intercepted.aop.registry import InterceptorKindRegistry, default_registry
from intercepted.aop.types import InterceptorDeclaration

T = TypeVar("T", bound=type)

_DECLARATIONS_ATTR = "__intercepted_declarations__"


# ---------------------------------------------------------------------------
# @intercepted_by — declares interceptor kinds on a class
# ---------------------------------------------------------------------------


def intercepted_by(*kinds: type | str) -> Callable[[T], T]:
    """Declare interceptor kinds for every proxy built from the decorated class.

    Each kind is an interceptor class (built with its zero-argument
    constructor) or an identifier registered with :func:`interceptor_kind`.
    Several kinds and several stacked decorators are allowed; declaration
    order is source order, top to bottom::

        @intercepted_by(LoggingInterceptor)
        @intercepted_by("metrics", ValidationInterceptor)
        class Calculator: ...

    Declarations belong to the decorated class only and are not inherited
    by subclasses.

    Raises:
        TypeError: If no kind is given, or a kind is neither a class nor a string.
    """
    if not kinds:
        raise TypeError("intercepted_by requires at least one interceptor kind")
    for kind in kinds:
        if not isinstance(kind, (type, str)):
            raise TypeError(f"intercepted_by expects interceptor classes or kind identifiers, got {kind!r}")

    def decorator(cls: T) -> T:
        if not isinstance(cls, type):
            raise TypeError("intercepted_by can only decorate classes")
        declared = tuple(InterceptorDeclaration(cls, kind) for kind in kinds)
        # Decorators apply bottom-up; prepending keeps top-to-bottom order.
        setattr(cls, _DECLARATIONS_ATTR, declared + get_declarations(cls))
        return cls

    return decorator


def get_declarations(cls: type) -> tuple[InterceptorDeclaration, ...]:
    """Return the declarations recorded directly on *cls*, in declaration order."""
    return tuple(vars(cls).get(_DECLARATIONS_ATTR, ()))


def get_declared_interceptor_kinds(cls: type) -> tuple[type | str, ...]:
    """Return the declared interceptor kinds of *cls*, in declaration order."""
    return tuple(declaration.kind for declaration in get_declarations(cls))


# ---------------------------------------------------------------------------
# @interceptor_kind — registers an interceptor class under an identifier
# ---------------------------------------------------------------------------


def interceptor_kind(kind_id: str, registry: InterceptorKindRegistry | None = None) -> Callable[[T], T]:
    """Register the decorated interceptor class under *kind_id*.

    Uses the process-wide :data:`~intercepted.aop.registry.default_registry`
    unless another *registry* is given.
    """

    def decorator(cls: T) -> T:
        (registry if registry is not None else default_registry).register(kind_id, cls)
        cls.__intercepted_kind__ = kind_id  # type: ignore[attr-defined]
        return cls

    return decorator
