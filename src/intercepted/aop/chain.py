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
"""InterceptorChain — composes an ordered list of interceptors into one."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from intercepted.aop.dispatcher import LifecycleDispatcher
from intercepted.aop.types import Invocation


class InterceptorChain:
    """Russian-doll composition of interceptors over a single invocation.

    Level *i* runs interceptor *i* through the :class:`LifecycleDispatcher`;
    its ``proceed()`` dispatches level *i + 1*, and the innermost level's
    ``proceed()`` runs the real method. ``on_entry`` therefore runs first to
    last while ``on_success``/``on_exit`` run last to first.

    Each level converts failures on its own, so the level above observes a
    successful call carrying the default (or overridden) return value unless
    a lower ``on_exception``/``on_exit`` raised.

    With no interceptors the real call runs directly and its errors
    propagate unchanged.
    """

    def __init__(
        self,
        interceptors: Iterable[Any] = (),
        dispatcher: LifecycleDispatcher | None = None,
    ) -> None:
        self._interceptors: tuple[Any, ...] = tuple(interceptors)
        self._dispatcher = dispatcher if dispatcher is not None else LifecycleDispatcher()

    @property
    def interceptors(self) -> tuple[Any, ...]:
        """The composed interceptors, outermost first."""
        return self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._interceptors)

    def __repr__(self) -> str:
        names = ", ".join(type(i).__name__ for i in self._interceptors)
        return f"InterceptorChain([{names}])"

    def intercept(self, invocation: Invocation) -> Any:
        if not self._interceptors:
            return invocation.proceed()
        return self._dispatch(0, invocation)

    async def intercept_async(self, invocation: Invocation) -> Any:
        if not self._interceptors:
            return await invocation.proceed()
        return await self._dispatch_async(0, invocation)

    def _dispatch(self, index: int, invocation: Invocation) -> Any:
        continuation: Callable[[], Any] | None = None
        if index + 1 < len(self._interceptors):
            continuation = functools.partial(self._dispatch, index + 1, invocation)

        previous = invocation.install_continuation(continuation)
        try:
            return self._dispatcher.intercept(self._interceptors[index], invocation)
        finally:
            invocation.install_continuation(previous)

    async def _dispatch_async(self, index: int, invocation: Invocation) -> Any:
        continuation: Callable[[], Any] | None = None
        if index + 1 < len(self._interceptors):
            continuation = functools.partial(self._dispatch_async, index + 1, invocation)

        previous = invocation.install_continuation(continuation)
        try:
            return await self._dispatcher.intercept_async(self._interceptors[index], invocation)
        finally:
            invocation.install_continuation(previous)
