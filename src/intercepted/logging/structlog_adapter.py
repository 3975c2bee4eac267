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
"""StructlogAdapter — default LoggingPort implementation using structlog."""

from __future__ import annotations

import logging
import threading
from typing import Any

import structlog

from intercepted.core.config import Config

_PACKAGE_LOGGER = "intercepted"


class StructlogAdapter:
    """Logging adapter handing out structlog loggers bound to stdlib loggers.

    Reads ``intercepted.logging.level`` and ``intercepted.logging.format``
    (``console`` or ``json``). ``root`` sets the level of the ``intercepted``
    logger hierarchy; other keys set per-module levels. Events below the
    configured level are dropped before rendering, and rendered events go to
    whatever handlers the host application installed on the stdlib loggers.

    The adapter never calls ``structlog.configure`` or
    ``logging.basicConfig``: the host's logging setup stays untouched.
    """

    def __init__(self) -> None:
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._module_levels: dict[str, str] = {}
        self._processors: list[Any] = self._build_processors()

    def configure(self, config: Config) -> None:
        """Apply the logging section of *config*."""
        level_section = dict(config.get_section("intercepted.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._module_levels = {k: str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("intercepted.logging.format", "console")).lower()

        self._processors = self._build_processors()
        self.set_level(_PACKAGE_LOGGER, self._root_level)
        for module, level in self._module_levels.items():
            self.set_level(module, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog BoundLogger wrapping the stdlib logger *name*."""
        return structlog.wrap_logger(
            logging.getLogger(name),
            processors=list(self._processors),
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def _build_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if self._format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors


_default_adapter: StructlogAdapter | None = None
_default_lock = threading.Lock()


def default_adapter() -> StructlogAdapter:
    """Return the shared adapter, configured from the packaged defaults on first use."""
    global _default_adapter
    with _default_lock:
        if _default_adapter is None:
            adapter = StructlogAdapter()
            adapter.configure(Config.defaults())
            _default_adapter = adapter
        return _default_adapter


def get_logger(name: str) -> Any:
    """Logger for framework components built without an explicit logging port."""
    return default_adapter().get_logger(name)
