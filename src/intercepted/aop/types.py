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
"""AOP core types — Invocation and InterceptorDeclaration."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from intercepted.kernel.exceptions import InvocationAlreadyProceededError


@dataclass
class Invocation:
    """One in-flight call on a proxied object.

    Created by the proxy engine for a single call and handed by reference to
    every interceptor in the chain; never persisted.

    Attributes:
        target: The proxy instance receiving the call.
        method: The original (unbound) function being intercepted.
        method_name: Name of the method being called.
        args: Positional arguments; interceptors may mutate them before
            the real call runs.
        kwargs: Keyword arguments; mutable like ``args``.
        call: Delegate to the real implementation, called as
            ``call(*args, **kwargs)``. Runs at most once.
        return_type: Declared return annotation of ``method``.
        return_value: The return value slot, written by the real call and
            overridable by hooks.
    """

    target: Any
    method: Callable[..., Any]
    method_name: str
    args: list[Any]
    kwargs: dict[str, Any]
    call: Callable[..., Any] = field(repr=False)
    return_type: Any = None
    return_value: Any = None
    _continuation: Callable[[], Any] | None = field(default=None, init=False, repr=False)
    _proceeded: bool = field(default=False, init=False, repr=False)

    @property
    def is_async(self) -> bool:
        """Whether the intercepted method is a coroutine function."""
        return inspect.iscoroutinefunction(self.method)

    @property
    def proceeded(self) -> bool:
        """Whether the real call has been executed."""
        return self._proceeded

    def get_argument(self, index: int) -> Any:
        return self.args[index]

    def set_argument(self, index: int, value: Any) -> None:
        self.args[index] = value

    def install_continuation(self, continuation: Callable[[], Any] | None) -> Callable[[], Any] | None:
        """Make ``proceed()`` run *continuation* instead of the real call.

        Used by :class:`~intercepted.aop.chain.InterceptorChain` to link one
        level to the next. Returns the previously installed continuation so
        the caller can restore it.
        """
        previous = self._continuation
        self._continuation = continuation
        return previous

    def proceed(self) -> Any:
        """Run the next link of the chain, or the real call.

        Stores the result in :attr:`return_value` and returns it. For
        coroutine methods the result is an awaitable that must be awaited.

        Raises:
            InvocationAlreadyProceededError: If the real call already ran.
        """
        if self._continuation is not None:
            return self._continuation()
        if self.is_async:
            return self._proceed_target_async()
        self._claim()
        self.return_value = self.call(*self.args, **self.kwargs)
        return self.return_value

    async def _proceed_target_async(self) -> Any:
        self._claim()
        self.return_value = await self.call(*self.args, **self.kwargs)
        return self.return_value

    def _claim(self) -> None:
        if self._proceeded:
            raise InvocationAlreadyProceededError(self.method_name)
        self._proceeded = True


@dataclass(frozen=True)
class InterceptorDeclaration:
    """A ``(target_type, kind)`` pair recorded on a class by ``@intercepted_by``.

    ``kind`` is either an interceptor class (built with its zero-argument
    constructor) or a kind identifier looked up in an
    :class:`~intercepted.aop.registry.InterceptorKindRegistry`.
    """

    target_type: type
    kind: type | str
