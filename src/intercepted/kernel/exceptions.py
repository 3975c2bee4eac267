"""Unified exception hierarchy for Intercepted.

All framework exceptions inherit from InterceptedException, enabling unified
error handling: catch InterceptedException to handle every framework error,
or catch a specific subclass for targeted handling.

Categories:
- InstantiationError: a declared interceptor kind cannot be constructed
- ProxyGenerationError: the proxy engine cannot build a proxy for a type
- InvocationAlreadyProceededError: the real call of an invocation was re-run

Errors raised by target methods and by interceptor hooks are never wrapped.
A target error is converted to a default return value by the dispatcher level
that catches it; a hook error propagates as-is.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class InterceptedException(Exception):
    """Base exception for all Intercepted errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "INTERCEPTOR_INSTANTIATION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Resolution Exceptions
# =============================================================================


class InstantiationError(InterceptedException):
    """A declared interceptor kind could not be constructed.

    Fatal to proxy construction: no partial proxy is ever returned.
    """

    def __init__(self, message: str, kind: object = None, context: dict | None = None) -> None:
        ctx = dict(context or {})
        if kind is not None:
            ctx.setdefault("kind", kind)
        super().__init__(message, code="INTERCEPTOR_INSTANTIATION", context=ctx)
        self.kind = kind


class UnknownInterceptorKindError(InstantiationError):
    """A declaration names a kind identifier missing from the kind registry."""


class DuplicateInterceptorKindError(InterceptedException):
    """A kind identifier is already registered."""

    def __init__(self, kind_id: str) -> None:
        super().__init__(
            f"Interceptor kind '{kind_id}' is already registered",
            code="INTERCEPTOR_KIND_DUPLICATE",
            context={"kind": kind_id},
        )
        self.kind_id = kind_id


# =============================================================================
# Proxy Exceptions
# =============================================================================


class ProxyGenerationError(InterceptedException):
    """The proxy engine could not build a proxy for the requested type."""

    def __init__(self, message: str, target_type: type | None = None) -> None:
        context = {"target_type": target_type.__qualname__} if target_type is not None else {}
        super().__init__(message, code="PROXY_GENERATION", context=context)
        self.target_type = target_type


class InvocationAlreadyProceededError(InterceptedException):
    """The underlying call of an invocation was requested a second time."""

    def __init__(self, method_name: str) -> None:
        super().__init__(
            f"Underlying call of '{method_name}' has already been executed",
            code="INVOCATION_ALREADY_PROCEEDED",
            context={"method": method_name},
        )
        self.method_name = method_name
