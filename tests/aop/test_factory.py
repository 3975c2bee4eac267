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
"""Tests for ProxyFactory — resolution, merge order and engine delegation."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from intercepted.aop.chain import InterceptorChain
from intercepted.aop.contract import Interceptor
from intercepted.aop.decorators import intercepted_by
from intercepted.aop.engine import ProxyMode, ProxyOptions, get_interceptors, is_proxy
from intercepted.aop.factory import ProxyFactory, create_proxy, default_factory, new
from intercepted.aop.registry import InterceptorKindRegistry
from intercepted.aop.resolver import DeclarationResolver
from intercepted.core.config import Config
from intercepted.kernel.exceptions import InstantiationError


class Declared(Interceptor):
    pass


class AlsoDeclared(Interceptor):
    pass


class Explicit(Interceptor):
    pass


class Broken(Interceptor):
    def __init__(self) -> None:
        raise ValueError("nope")


@intercepted_by(Declared, AlsoDeclared)
class Service:
    def ping(self) -> str:
        return "pong"


class Plain:
    def echo(self, value: Any) -> Any:
        return value


class RecordingEngine:
    """Engine double capturing what the factory hands over."""

    def __init__(self) -> None:
        self.calls: list[tuple[type, Any, Any]] = []

    def create_proxy(self, target_type: type, interceptor: Any, options: Any = None) -> Any:
        self.calls.append((target_type, interceptor, options))
        return "proxy"


class TestMergeOrder:
    def test_declared_precede_explicit(self) -> None:
        explicit_a, explicit_b = Explicit(), Explicit()
        proxy = ProxyFactory().create_proxy(Service, [explicit_a, explicit_b])

        resolved = get_interceptors(proxy)
        assert [type(i) for i in resolved] == [Declared, AlsoDeclared, Explicit, Explicit]
        assert resolved[2] is explicit_a
        assert resolved[3] is explicit_b

    def test_explicit_only(self) -> None:
        explicit = Explicit()
        proxy = ProxyFactory().create_proxy(Plain, [explicit])
        assert get_interceptors(proxy) == (explicit,)

    def test_each_proxy_gets_fresh_declared_instances(self) -> None:
        factory = ProxyFactory()
        first = get_interceptors(factory.create_proxy(Service))
        second = get_interceptors(factory.create_proxy(Service))
        assert first[0] is not second[0]


class TestPassThrough:
    def test_no_interceptors_still_yields_proxy(self) -> None:
        proxy = ProxyFactory().create_proxy(Plain)
        assert is_proxy(proxy)
        assert get_interceptors(proxy) == ()
        assert proxy.echo(42) == 42

    def test_no_interceptors_propagates_errors(self) -> None:
        class Failing:
            def run(self) -> int:
                raise LookupError("missing")

        proxy = ProxyFactory().create_proxy(Failing)
        with pytest.raises(LookupError):
            proxy.run()


class TestEngineDelegation:
    def test_hands_composed_chain_and_options_to_engine(self) -> None:
        engine = RecordingEngine()
        options = ProxyOptions(mode=ProxyMode.CLASS)
        explicit = Explicit()

        result = ProxyFactory(engine=engine).create_proxy(Service, [explicit], options)

        assert result == "proxy"
        ((target_type, composed, passed_options),) = engine.calls
        assert target_type is Service
        assert isinstance(composed, InterceptorChain)
        assert [type(i) for i in composed] == [Declared, AlsoDeclared, Explicit]
        assert passed_options is options

    def test_options_default_from_config(self) -> None:
        engine = RecordingEngine()

        ProxyFactory(engine=engine, config=Config({})).create_proxy(Plain)

        assert engine.calls[0][2].mode is ProxyMode.CLASS

    def test_interface_mode_in_config_is_rejected(self) -> None:
        config = Config({"intercepted": {"proxy": {"mode": "interface"}}})
        with pytest.raises(ValueError, match="interface"):
            ProxyFactory(engine=RecordingEngine(), config=config)

    def test_custom_resolver_registry(self) -> None:
        registry = InterceptorKindRegistry()
        registry.register("declared", Declared)

        @intercepted_by("declared")
        class ByName:
            pass

        engine = RecordingEngine()
        ProxyFactory(engine=engine, resolver=DeclarationResolver(registry)).create_proxy(ByName)
        assert [type(i) for i in engine.calls[0][1]] == [Declared]


class TestFailures:
    def test_instantiation_error_is_fatal(self) -> None:
        @intercepted_by(Declared, Broken)
        class Fragile:
            pass

        engine = RecordingEngine()
        with pytest.raises(InstantiationError):
            ProxyFactory(engine=engine).create_proxy(Fragile)
        assert engine.calls == []

    def test_explicit_non_interceptor_rejected(self) -> None:
        with pytest.raises(TypeError, match="interceptor hooks"):
            ProxyFactory().create_proxy(Plain, [object()])


class TestModuleLevelHelpers:
    def test_default_factory_is_shared(self) -> None:
        assert default_factory() is default_factory()

    def test_create_proxy(self) -> None:
        explicit = Explicit()
        proxy = create_proxy(Service, [explicit])
        assert proxy.ping() == "pong"
        assert get_interceptors(proxy)[-1] is explicit

    def test_new_with_varargs(self) -> None:
        first, second = Explicit(), Explicit()
        proxy = new(Plain, first, second)
        assert get_interceptors(proxy) == (first, second)
        assert proxy.echo("x") == "x"


class Divider:
    def divide(self, a: int, b: int) -> int:
        return a // b


@pytest.fixture
def _restore_package_level():
    package_logger = logging.getLogger("intercepted")
    saved = package_logger.level
    yield
    package_logger.setLevel(saved)


@pytest.mark.usefixtures("_restore_package_level")
class TestLoggingConfiguration:
    def test_converted_error_is_silent_at_default_level(self, capsys, caplog) -> None:
        divider = ProxyFactory().create_proxy(Divider, [Explicit()])

        assert divider.divide(1, 0) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""
        assert "call_error_converted" not in caplog.text

    def test_debug_level_from_config_emits_converted_error(self, caplog) -> None:
        config = Config({"intercepted": {"logging": {"format": "json", "level": {"root": "DEBUG"}}}})
        divider = ProxyFactory(config=config).create_proxy(Divider, [Explicit()])

        divider.divide(1, 0)

        messages = [r.getMessage() for r in caplog.records if r.name == "intercepted.aop.dispatcher"]
        assert any('"call_error_converted"' in m for m in messages)

    def test_factory_configures_given_logging_port(self) -> None:
        class PortDouble:
            def __init__(self) -> None:
                self.configured: list[Config] = []
                self.names: list[str] = []

            def configure(self, config: Config) -> None:
                self.configured.append(config)

            def get_logger(self, name: str) -> Any:
                self.names.append(name)
                return logging.getLogger(name)

            def set_level(self, name: str, level: str) -> None:
                pass

        config = Config({})
        port = PortDouble()
        ProxyFactory(engine=RecordingEngine(), config=config, logging_port=port)

        assert port.configured == [config]
        assert set(port.names) == {
            "intercepted.aop.factory",
            "intercepted.aop.resolver",
            "intercepted.aop.dispatcher",
        }
