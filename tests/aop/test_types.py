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
"""Tests for the Invocation dataclass."""

from __future__ import annotations

import pytest

from intercepted.aop.types import InterceptorDeclaration, Invocation
from intercepted.kernel.exceptions import InvocationAlreadyProceededError


def _add(a: int, b: int) -> int:
    return a + b


async def _async_add(a: int, b: int) -> int:
    return a + b


def _make(fn=_add, *args: int) -> tuple[Invocation, list[tuple]]:
    calls: list[tuple] = []

    def call(*a, **kw):
        calls.append(a)
        return fn(*a, **kw)

    inv = Invocation(
        target=object(),
        method=fn,
        method_name=fn.__name__,
        args=list(args or (1, 2)),
        kwargs={},
        call=call,
        return_type=int,
    )
    return inv, calls


class TestInvocation:
    def test_defaults(self) -> None:
        inv, _ = _make()
        assert inv.return_value is None
        assert inv.proceeded is False
        assert inv.is_async is False

    def test_proceed_runs_call_and_stores_result(self) -> None:
        inv, calls = _make()
        assert inv.proceed() == 3
        assert inv.return_value == 3
        assert inv.proceeded is True
        assert calls == [(1, 2)]

    def test_arguments_mutated_before_proceed_reach_call(self) -> None:
        inv, calls = _make()
        inv.set_argument(0, 40)
        assert inv.get_argument(0) == 40
        assert inv.proceed() == 42
        assert calls == [(40, 2)]

    def test_second_proceed_raises(self) -> None:
        inv, calls = _make()
        inv.proceed()
        with pytest.raises(InvocationAlreadyProceededError) as exc_info:
            inv.proceed()
        assert exc_info.value.method_name == "_add"
        assert len(calls) == 1

    def test_failed_call_still_counts_as_proceeded(self) -> None:
        def boom(a: int, b: int) -> int:
            raise ValueError("boom")

        inv, _ = _make(boom)
        with pytest.raises(ValueError):
            inv.proceed()
        assert inv.proceeded is True
        with pytest.raises(InvocationAlreadyProceededError):
            inv.proceed()

    def test_continuation_replaces_real_call(self) -> None:
        inv, calls = _make()
        previous = inv.install_continuation(lambda: "next link")
        assert previous is None
        assert inv.proceed() == "next link"
        assert calls == []
        inv.install_continuation(previous)
        assert inv.proceed() == 3

    @pytest.mark.asyncio
    async def test_async_proceed_returns_awaitable(self) -> None:
        inv, calls = _make(_async_add, 5, 6)
        assert inv.is_async is True
        assert await inv.proceed() == 11
        assert inv.return_value == 11
        assert calls == [(5, 6)]


class TestInterceptorDeclaration:
    def test_is_frozen(self) -> None:
        decl = InterceptorDeclaration(int, "logging")
        with pytest.raises(AttributeError):
            decl.kind = "other"  # type: ignore[misc]

    def test_equality(self) -> None:
        assert InterceptorDeclaration(int, "a") == InterceptorDeclaration(int, "a")
