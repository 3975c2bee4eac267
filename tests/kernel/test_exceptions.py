"""Tests for the Intercepted exception hierarchy."""

import pytest

from intercepted.kernel.exceptions import (
    DuplicateInterceptorKindError,
    InstantiationError,
    InterceptedException,
    InvocationAlreadyProceededError,
    ProxyGenerationError,
    UnknownInterceptorKindError,
)


class TestInterceptedException:
    def test_message_code_and_context(self):
        exc = InterceptedException("boom", code="X_001", context={"k": "v"})
        assert str(exc) == "boom"
        assert exc.code == "X_001"
        assert exc.context == {"k": "v"}

    def test_context_defaults_to_empty_dict(self):
        assert InterceptedException("boom").context == {}

    @pytest.mark.parametrize(
        "exc_type",
        [
            InstantiationError,
            UnknownInterceptorKindError,
            DuplicateInterceptorKindError,
            ProxyGenerationError,
            InvocationAlreadyProceededError,
        ],
    )
    def test_all_errors_share_the_base(self, exc_type):
        assert issubclass(exc_type, InterceptedException)


class TestInstantiationError:
    def test_kind_recorded_in_context(self):
        exc = InstantiationError("cannot build", kind="audit", context={"target_type": "Service"})
        assert exc.code == "INTERCEPTOR_INSTANTIATION"
        assert exc.kind == "audit"
        assert exc.context == {"kind": "audit", "target_type": "Service"}

    def test_unknown_kind_is_instantiation_error(self):
        with pytest.raises(InstantiationError):
            raise UnknownInterceptorKindError("missing", kind="nope")


class TestProxyErrors:
    def test_proxy_generation_error_context(self):
        exc = ProxyGenerationError("cannot subclass", bool)
        assert exc.code == "PROXY_GENERATION"
        assert exc.target_type is bool
        assert exc.context == {"target_type": "bool"}

    def test_invocation_already_proceeded(self):
        exc = InvocationAlreadyProceededError("divide")
        assert exc.method_name == "divide"
        assert "divide" in str(exc)
        assert exc.code == "INVOCATION_ALREADY_PROCEEDED"

    def test_duplicate_kind(self):
        exc = DuplicateInterceptorKindError("audit")
        assert exc.kind_id == "audit"
        assert exc.context == {"kind": "audit"}
