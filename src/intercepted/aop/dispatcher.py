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
"""LifecycleDispatcher — runs one interceptor's hooks around an invocation."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

from intercepted.aop.defaults import default_value
from intercepted.logging.structlog_adapter import get_logger

if TYPE_CHECKING:
    from intercepted.aop.contract import Interceptor
    from intercepted.aop.types import Invocation


class LifecycleDispatcher:
    """Executes the interception lifecycle for a single interceptor.

    Order of events:

    1. ``on_entry`` — a failure here skips the real call.
    2. ``invocation.proceed()`` — the next chain link or the real method.
    3. ``on_success`` — only when 1 and 2 succeeded.
    4. On any ``Exception`` from 1-3: ``return_value`` is set to the default
       for the declared return type, then ``on_exception`` runs. The error is
       handled here and does not propagate.
    5. ``on_exit`` — always, last.

    On the synchronous path every hook must be a plain method: an ``async def``
    hook raises :class:`TypeError` before anything runs.

    Errors raised by ``on_exception`` or ``on_exit`` are not caught: they
    leave :meth:`intercept` in place of the original error. Non-``Exception``
    errors (``KeyboardInterrupt``, ``asyncio.CancelledError``) propagate after
    ``on_exit`` has run.
    """

    def __init__(self, log_call_errors: bool = True, logger: Any = None) -> None:
        self._log_call_errors = log_call_errors
        self._logger = logger

    @property
    def logger(self) -> Any:
        if self._logger is None:
            self._logger = get_logger("intercepted.aop.dispatcher")
        return self._logger

    def intercept(self, interceptor: Interceptor, invocation: Invocation) -> Any:
        """Run *interceptor*'s hooks around a synchronous *invocation*.

        Returns the final ``invocation.return_value``.
        """
        _reject_async_hooks(interceptor)
        try:
            interceptor.on_entry(invocation)
            invocation.proceed()
            interceptor.on_success(invocation)
        except Exception as exc:
            self._install_default(interceptor, invocation, exc)
            interceptor.on_exception(invocation, exc)
        finally:
            interceptor.on_exit(invocation)
        return invocation.return_value

    async def intercept_async(self, interceptor: Interceptor, invocation: Invocation) -> Any:
        """Async counterpart of :meth:`intercept` for coroutine methods.

        Hooks may be plain methods or coroutines; awaitable results are awaited.
        """
        try:
            await _maybe_await(interceptor.on_entry(invocation))
            await invocation.proceed()
            await _maybe_await(interceptor.on_success(invocation))
        except Exception as exc:
            self._install_default(interceptor, invocation, exc)
            await _maybe_await(interceptor.on_exception(invocation, exc))
        finally:
            await _maybe_await(interceptor.on_exit(invocation))
        return invocation.return_value

    def _install_default(self, interceptor: Interceptor, invocation: Invocation, exc: Exception) -> None:
        invocation.return_value = default_value(invocation.return_type)
        if self._log_call_errors:
            self.logger.debug(
                "call_error_converted",
                method=invocation.method_name,
                interceptor=type(interceptor).__name__,
                error=type(exc).__name__,
                detail=str(exc),
                default=invocation.return_value,
            )


async def _maybe_await(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


_HOOK_NAMES = ("on_entry", "on_success", "on_exception", "on_exit")


def _reject_async_hooks(interceptor: Interceptor) -> None:
    for name in _HOOK_NAMES:
        if inspect.iscoroutinefunction(getattr(interceptor, name, None)):
            raise TypeError(
                f"{type(interceptor).__qualname__}.{name} is a coroutine function; "
                "async hooks are only supported on coroutine methods"
            )
