"""Intercepted — attach lifecycle interceptors around method calls through proxies."""

from intercepted.aop import (
    DeclarationResolver,
    Interceptor,
    InterceptorChain,
    Invocation,
    LifecycleDispatcher,
    ProxyFactory,
    ProxyMode,
    ProxyOptions,
    create_proxy,
    intercepted_by,
    interceptor_kind,
    new,
)
from intercepted.kernel.exceptions import InstantiationError, InterceptedException

__version__ = "0.1.0"

__all__ = [
    "DeclarationResolver",
    "InstantiationError",
    "InterceptedException",
    "Interceptor",
    "InterceptorChain",
    "Invocation",
    "LifecycleDispatcher",
    "ProxyFactory",
    "ProxyMode",
    "ProxyOptions",
    "create_proxy",
    "intercepted_by",
    "interceptor_kind",
    "new",
]
