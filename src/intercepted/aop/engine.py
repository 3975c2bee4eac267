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
"""Proxy engine — builds proxy objects that route calls through an interceptor.

:class:`ProxyEngine` is the narrow seam the factory depends on.
:class:`DynamicProxyEngine` is the bundled implementation: it generates a
subclass of the target type (class mode) or of an interface type delegating
to a target instance (interface mode), and overrides every public instance
method with a wrapper that builds an :class:`Invocation` per call.
"""

from __future__ import annotations

import functools
import inspect
import threading
import types
from collections import OrderedDict
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from intercepted.aop.chain import InterceptorChain
from intercepted.aop.contract import MethodInterceptor
from intercepted.aop.defaults import resolve_return_type
from intercepted.aop.types import Invocation
from intercepted.core.config import Config, config_properties
from intercepted.kernel.exceptions import ProxyGenerationError

_PROXY_ATTR = "__intercepted_proxy__"
_TARGET_TYPE_ATTR = "__intercepted_target_type__"
_INTERCEPTOR_ATTR = "__intercepted_interceptor__"
_TARGET_ATTR = "__intercepted_target__"


class ProxyMode(Enum):
    """How the proxy reaches the real implementation."""

    CLASS = "class"
    INTERFACE = "interface"


@config_properties(prefix="intercepted.proxy")
@dataclass
class ProxySettings:
    """Configuration bound from ``intercepted.proxy``.

    Only ``class`` mode can be configured: an interface proxy needs a target
    instance, which is passed per call with
    ``ProxyOptions(mode=ProxyMode.INTERFACE, target=...)``.
    """

    mode: str = "class"
    log_call_errors: bool = True

    def __post_init__(self) -> None:
        self.mode = str(self.mode).lower()
        valid = [m.value for m in ProxyMode]
        if self.mode not in valid:
            raise ValueError(f"intercepted.proxy.mode must be one of {valid}, got {self.mode!r}")
        if self.mode == ProxyMode.INTERFACE.value:
            raise ValueError(
                "intercepted.proxy.mode cannot be 'interface': interface proxies need a target, "
                "pass ProxyOptions(mode=ProxyMode.INTERFACE, target=...) when creating the proxy"
            )


@dataclass(frozen=True)
class ProxyOptions:
    """Options understood by :class:`DynamicProxyEngine`.

    Attributes:
        mode: ``CLASS`` subclasses the target type and runs its own methods;
            ``INTERFACE`` subclasses the given interface type and forwards
            to ``target``.
        target: Implementation instance for interface mode.
        additional_interfaces: Extra base classes the proxy class inherits.
        hook: ``hook(target_type, method_name) -> bool`` selecting which
            public methods are intercepted. All are when unset.
        init_args: Positional constructor arguments (class mode).
        init_kwargs: Keyword constructor arguments (class mode).
    """

    mode: ProxyMode = ProxyMode.CLASS
    target: Any = None
    additional_interfaces: tuple[type, ...] = ()
    hook: Callable[[type, str], bool] | None = None
    init_args: tuple[Any, ...] = ()
    init_kwargs: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Config) -> ProxyOptions:
        settings = config.bind(ProxySettings)
        return cls(mode=ProxyMode(settings.mode))


@runtime_checkable
class ProxyEngine(Protocol):
    """Builds a proxy for *target_type* whose calls go through *interceptor*."""

    def create_proxy(
        self,
        target_type: type,
        interceptor: MethodInterceptor,
        options: ProxyOptions | None = None,
    ) -> Any: ...


class DynamicProxyEngine:
    """Proxy engine based on dynamically generated subclasses.

    Only public (non-underscore) plain functions found on the type's MRO are
    intercepted; static methods, class methods and properties are inherited
    untouched. Proxy classes are cached per type and options shape, while the
    interceptor (and interface-mode target) is stored on each proxy instance.

    The class cache keeps the *cache_size* most recently used proxy classes.
    Options carrying a distinct ``hook`` callable each get their own class, so
    building many proxies with per-call lambdas evicts older entries instead
    of growing without bound.
    """

    def __init__(self, cache_size: int = 256) -> None:
        if cache_size < 1:
            raise ValueError("cache_size must be at least 1")
        self._cache_size = cache_size
        self._classes: OrderedDict[tuple[Any, ...], type] = OrderedDict()
        self._lock = threading.Lock()

    def create_proxy(
        self,
        target_type: type,
        interceptor: MethodInterceptor,
        options: ProxyOptions | None = None,
    ) -> Any:
        options = options if options is not None else ProxyOptions()
        if options.mode is ProxyMode.INTERFACE and options.target is None:
            raise ProxyGenerationError(
                f"Interface proxy for {target_type.__qualname__} requires a target instance",
                target_type,
            )

        proxy_cls = self.proxy_class(target_type, options)

        if proxy_cls.__new__ is object.__new__ or options.mode is ProxyMode.INTERFACE:
            proxy = object.__new__(proxy_cls)
        else:
            proxy = proxy_cls.__new__(proxy_cls, *options.init_args, **options.init_kwargs)

        # Installed before __init__ so calls made by the constructor are intercepted.
        object.__setattr__(proxy, _INTERCEPTOR_ATTR, interceptor)
        if options.mode is ProxyMode.INTERFACE:
            object.__setattr__(proxy, _TARGET_ATTR, options.target)
        else:
            proxy.__init__(*options.init_args, **options.init_kwargs)
        return proxy

    def proxy_class(self, target_type: type, options: ProxyOptions) -> type:
        """Return the (cached) proxy class for *target_type* under *options*."""
        key = (target_type, options.mode, options.additional_interfaces, options.hook)
        with self._lock:
            cached = self._classes.get(key)
            if cached is not None:
                self._classes.move_to_end(key)
                return cached
            cached = self._classes[key] = _generate_proxy_class(target_type, options)
            while len(self._classes) > self._cache_size:
                self._classes.popitem(last=False)
            return cached


# ---------------------------------------------------------------------------
# Proxy class generation
# ---------------------------------------------------------------------------


def _generate_proxy_class(target_type: type, options: ProxyOptions) -> type:
    if not isinstance(target_type, type):
        raise ProxyGenerationError(f"Cannot proxy {target_type!r}: not a class")

    bases = (target_type, *(i for i in options.additional_interfaces if i is not target_type))
    interface_mode = options.mode is ProxyMode.INTERFACE

    namespace: dict[str, Any] = {
        _PROXY_ATTR: True,
        _TARGET_TYPE_ATTR: target_type,
        # Instances built without the engine (e.g. cls() in a classmethod) pass through.
        _INTERCEPTOR_ATTR: InterceptorChain(),
        "__module__": target_type.__module__,
        "__qualname__": f"{target_type.__qualname__}Proxy",
    }

    for name, original in _public_methods(bases).items():
        if options.hook is not None and not options.hook(target_type, name):
            if interface_mode:
                namespace[name] = _build_forwarder(name, original)
            continue
        if inspect.iscoroutinefunction(original):
            namespace[name] = _build_async_wrapper(name, original, interface_mode)
        else:
            namespace[name] = _build_sync_wrapper(name, original, interface_mode)

    try:
        return types.new_class(
            f"{target_type.__name__}Proxy",
            bases,
            exec_body=lambda ns: ns.update(namespace),
        )
    except TypeError as exc:
        raise ProxyGenerationError(f"Cannot subclass {target_type.__qualname__}: {exc}", target_type) from exc


def _public_methods(bases: tuple[type, ...]) -> dict[str, Callable[..., Any]]:
    """Plain public functions reachable from *bases*, first base winning."""
    methods: dict[str, Callable[..., Any]] = {}
    for base in bases:
        for name in dir(base):
            if name.startswith("_") or name in methods:
                continue
            attr = inspect.getattr_static(base, name)
            if inspect.isfunction(attr):
                methods[name] = attr
    return methods


def _delegate(proxy: Any, name: str, original: Callable[..., Any], interface_mode: bool) -> Callable[..., Any]:
    if interface_mode:
        return getattr(object.__getattribute__(proxy, _TARGET_ATTR), name)
    return functools.partial(original, proxy)


def _new_invocation(
    proxy: Any,
    name: str,
    original: Any,
    return_type: Any,
    interface_mode: bool,
    args: tuple,
    kwargs: dict,
) -> Invocation:
    return Invocation(
        target=proxy,
        method=original,
        method_name=name,
        args=list(args),
        kwargs=dict(kwargs),
        call=_delegate(proxy, name, original, interface_mode),
        return_type=return_type,
    )


def _finish_wrapper(wrapper: Any) -> Any:
    # functools.wraps copies __isabstractmethod__; the override is concrete.
    wrapper.__isabstractmethod__ = False
    return wrapper


def _build_sync_wrapper(name: str, original: Any, interface_mode: bool) -> Any:
    return_type = resolve_return_type(original)

    @functools.wraps(original)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        invocation = _new_invocation(self, name, original, return_type, interface_mode, args, kwargs)
        return object.__getattribute__(self, _INTERCEPTOR_ATTR).intercept(invocation)

    return _finish_wrapper(wrapper)


def _build_async_wrapper(name: str, original: Any, interface_mode: bool) -> Any:
    return_type = resolve_return_type(original)

    @functools.wraps(original)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        invocation = _new_invocation(self, name, original, return_type, interface_mode, args, kwargs)
        return await object.__getattribute__(self, _INTERCEPTOR_ATTR).intercept_async(invocation)

    return _finish_wrapper(wrapper)


def _build_forwarder(name: str, original: Any) -> Any:
    """Plain interface-mode delegation for methods the hook leaves alone."""

    @functools.wraps(original)
    def forwarder(self: Any, *args: Any, **kwargs: Any) -> Any:
        return getattr(object.__getattribute__(self, _TARGET_ATTR), name)(*args, **kwargs)

    return _finish_wrapper(forwarder)


# ---------------------------------------------------------------------------
# Proxy introspection
# ---------------------------------------------------------------------------


def is_proxy(obj: object) -> bool:
    """Whether *obj* was built by :class:`DynamicProxyEngine`."""
    return bool(getattr(type(obj), _PROXY_ATTR, False))


def get_interceptors(proxy: object) -> tuple[Any, ...]:
    """Return the interceptor set a proxy routes its calls through.

    Raises:
        TypeError: If *proxy* is not a proxy.
    """
    if not is_proxy(proxy):
        raise TypeError(f"{type(proxy).__qualname__} is not an intercepted proxy")
    interceptor = object.__getattribute__(proxy, _INTERCEPTOR_ATTR)
    return tuple(getattr(interceptor, "interceptors", (interceptor,)))


def get_target_type(proxy: object) -> type:
    """Return the type a proxy stands in for."""
    if not is_proxy(proxy):
        raise TypeError(f"{type(proxy).__qualname__} is not an intercepted proxy")
    return getattr(type(proxy), _TARGET_TYPE_ATTR)
