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
"""ProxyFactory — resolves, merges and composes interceptors, then builds a proxy."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any, TypeVar

from intercepted.aop.chain import InterceptorChain
from intercepted.aop.contract import is_interceptor
from intercepted.aop.dispatcher import LifecycleDispatcher
from intercepted.aop.engine import DynamicProxyEngine, ProxyEngine, ProxyOptions, ProxySettings
from intercepted.aop.resolver import DeclarationResolver
from intercepted.core.config import Config
from intercepted.logging.port import LoggingPort
from intercepted.logging.structlog_adapter import StructlogAdapter

T = TypeVar("T")


class ProxyFactory:
    """Entry point for building intercepted proxies.

    Usage::

        factory = ProxyFactory()
        calculator = factory.create_proxy(Calculator, [RetryInterceptor()])
        calculator.divide(10, 0)  # -> 0, errors handled by the interceptors

    The interceptor set of each proxy is the declared interceptors of the
    type (in declaration order) followed by *explicit_interceptors* (in the
    order given). A type with no interceptors at all still yields a proxy,
    whose calls pass straight through.

    The factory configures *logging_port* (a fresh :class:`StructlogAdapter`
    by default) from *config* and hands its loggers to the dispatcher and to
    the resolver it creates.
    """

    def __init__(
        self,
        engine: ProxyEngine | None = None,
        resolver: DeclarationResolver | None = None,
        config: Config | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        self._config = config if config is not None else Config.defaults()
        self._logging: LoggingPort = logging_port if logging_port is not None else StructlogAdapter()
        self._logging.configure(self._config)
        self._logger = self._logging.get_logger("intercepted.aop.factory")

        settings = self._config.bind(ProxySettings)
        self._engine: ProxyEngine = engine if engine is not None else DynamicProxyEngine()
        self._resolver = (
            resolver
            if resolver is not None
            else DeclarationResolver(logger=self._logging.get_logger("intercepted.aop.resolver"))
        )
        self._dispatcher = LifecycleDispatcher(
            log_call_errors=settings.log_call_errors,
            logger=self._logging.get_logger("intercepted.aop.dispatcher"),
        )

    @property
    def engine(self) -> ProxyEngine:
        return self._engine

    @property
    def resolver(self) -> DeclarationResolver:
        return self._resolver

    def create_proxy(
        self,
        target_type: type[T],
        explicit_interceptors: Iterable[Any] | None = None,
        options: ProxyOptions | None = None,
    ) -> T:
        """Build a proxy of *target_type*.

        Args:
            target_type: The class (or, in interface mode, the interface) to proxy.
            explicit_interceptors: Interceptor instances appended after the
                declared ones.
            options: Engine options; built from configuration when omitted.

        Raises:
            InstantiationError: If a declared interceptor kind cannot be built.
            TypeError: If an explicit interceptor lacks the lifecycle hooks.
        """
        explicit = list(explicit_interceptors or ())
        for interceptor in explicit:
            if not is_interceptor(interceptor):
                raise TypeError(f"{type(interceptor).__qualname__} does not implement the interceptor hooks")

        declared = self._resolver.resolve(target_type)
        composed = InterceptorChain([*declared, *explicit], self._dispatcher)

        if options is None:
            options = ProxyOptions.from_config(self._config)
        proxy = self._engine.create_proxy(target_type, composed, options)

        self._logger.debug(
            "proxy_created",
            target=target_type.__qualname__,
            mode=options.mode.value,
            declared=len(declared),
            explicit=len(explicit),
        )
        return proxy


_default_factory: ProxyFactory | None = None
_default_lock = threading.Lock()


def default_factory() -> ProxyFactory:
    """Return the shared, lazily created :class:`ProxyFactory`."""
    global _default_factory
    with _default_lock:
        if _default_factory is None:
            _default_factory = ProxyFactory()
        return _default_factory


def create_proxy(
    target_type: type[T],
    explicit_interceptors: Iterable[Any] | None = None,
    options: ProxyOptions | None = None,
) -> T:
    """Build a proxy of *target_type* with the shared default factory."""
    return default_factory().create_proxy(target_type, explicit_interceptors, options)


def new(target_type: type[T], *interceptors: Any, options: ProxyOptions | None = None) -> T:
    """Shorthand for ``create_proxy(target_type, interceptors, options)``.

    >>> calculator = new(Calculator, RetryInterceptor())  # doctest: +SKIP
    """
    return default_factory().create_proxy(target_type, interceptors, options)
