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
"""Interceptor contract — lifecycle hooks every interceptor implements."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from intercepted.aop.dispatcher import LifecycleDispatcher
from intercepted.aop.types import Invocation

_DISPATCHER = LifecycleDispatcher()


class Interceptor:
    """Base class for interceptors.

    Override any of the four hooks; each defaults to a no-op::

        class LoggingInterceptor(Interceptor):
            def on_entry(self, invocation):
                log.info("calling", method=invocation.method_name)

            def on_exception(self, invocation, error):
                log.warning("failed", method=invocation.method_name, error=str(error))

    Interceptors are resolved once per proxy and shared by every call made
    through it. Implementations keeping mutable state must synchronise it
    themselves.
    """

    def on_entry(self, invocation: Invocation) -> Any:
        """Called before the real call; may inspect or mutate arguments."""

    def on_success(self, invocation: Invocation) -> Any:
        """Called after the real call completed without error."""

    def on_exception(self, invocation: Invocation, error: Exception) -> Any:
        """Called when the call failed.

        ``invocation.return_value`` already holds the type default and may be
        overwritten with a custom fallback.
        """

    def on_exit(self, invocation: Invocation) -> Any:
        """Called last, on success and failure alike."""

    def intercept(self, invocation: Invocation) -> Any:
        return _DISPATCHER.intercept(self, invocation)

    async def intercept_async(self, invocation: Invocation) -> Any:
        return await _DISPATCHER.intercept_async(self, invocation)


@runtime_checkable
class MethodInterceptor(Protocol):
    """The composed interceptor handed to a proxy engine."""

    def intercept(self, invocation: Invocation) -> Any: ...

    async def intercept_async(self, invocation: Invocation) -> Any: ...


_HOOKS = ("on_entry", "on_success", "on_exception", "on_exit")


def is_interceptor(obj: object) -> bool:
    """Whether *obj* exposes all four lifecycle hooks."""
    return all(callable(getattr(obj, hook, None)) for hook in _HOOKS)
