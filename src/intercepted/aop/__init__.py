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
"""Method interception for Intercepted: lifecycle hooks, chains and proxies."""

from intercepted.aop.chain import InterceptorChain
from intercepted.aop.contract import Interceptor, MethodInterceptor, is_interceptor
from intercepted.aop.decorators import (
    get_declarations,
    get_declared_interceptor_kinds,
    intercepted_by,
    interceptor_kind,
)
from intercepted.aop.defaults import default_value
from intercepted.aop.dispatcher import LifecycleDispatcher
from intercepted.aop.engine import (
    DynamicProxyEngine,
    ProxyEngine,
    ProxyMode,
    ProxyOptions,
    ProxySettings,
    get_interceptors,
    get_target_type,
    is_proxy,
)
from intercepted.aop.factory import ProxyFactory, create_proxy, default_factory, new
from intercepted.aop.registry import InterceptorKindRegistry, default_registry
from intercepted.aop.resolver import DeclarationResolver
from intercepted.aop.types import InterceptorDeclaration, Invocation

__all__ = [
    "DeclarationResolver",
    "DynamicProxyEngine",
    "Interceptor",
    "InterceptorChain",
    "InterceptorDeclaration",
    "InterceptorKindRegistry",
    "Invocation",
    "LifecycleDispatcher",
    "MethodInterceptor",
    "ProxyEngine",
    "ProxyFactory",
    "ProxyMode",
    "ProxyOptions",
    "ProxySettings",
    "create_proxy",
    "default_factory",
    "default_registry",
    "default_value",
    "get_declarations",
    "get_declared_interceptor_kinds",
    "get_interceptors",
    "get_target_type",
    "intercepted_by",
    "interceptor_kind",
    "is_interceptor",
    "is_proxy",
    "new",
]
