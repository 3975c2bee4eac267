"""Intercepted Kernel — foundation layer with zero external dependencies."""

from intercepted.kernel.exceptions import (
    DuplicateInterceptorKindError,
    InstantiationError,
    InterceptedException,
    InvocationAlreadyProceededError,
    ProxyGenerationError,
    UnknownInterceptorKindError,
)

__all__ = [
    "DuplicateInterceptorKindError",
    "InstantiationError",
    "InterceptedException",
    "InvocationAlreadyProceededError",
    "ProxyGenerationError",
    "UnknownInterceptorKindError",
]
