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
"""StructlogAdapter — routes the CORS decision log through structlog.

The engine's loggers (``pycors.cors.preflight``, ``pycors.cors.decorator``,
``pycors.web``) are plain ``structlog.get_logger`` proxies; this adapter
decides where their events go and how they are rendered.

Configuration keys::

    pycors:
      logging:
        format: console        # console | json | logfmt
        level:
          root: INFO
          pycors.cors: DEBUG   # or nested: {pycors: {cors: DEBUG}}
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any, TextIO

import structlog

from pycors.core.config import Config

CORS_LOGGER = "pycors.cors"

FORMATS = ("console", "json", "logfmt")

# Event keys carrying request header values verbatim
UNTRUSTED_KEYS = ("origin", "method", "headers", "detail")

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")


def escape_request_values(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Escape control characters in values copied from request headers.

    A crafted ``Origin`` such as ``"http://a.com\\nforged line"`` is logged
    as one line.
    """
    for key in UNTRUSTED_KEYS:
        value = event_dict.get(key)
        if isinstance(value, str):
            event_dict[key] = _CONTROL_RE.sub(lambda m: f"\\x{ord(m.group()):02x}", value)
    return event_dict


class StructlogAdapter:
    """:class:`~pycors.logging.port.LoggingPort` backed by structlog.

    Args:
        stream: Where rendered lines go (stdout when omitted).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.root_level: str = "INFO"
        self.format: str = "console"
        self.logger_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = _flatten(config.get_section("pycors.logging.level"))
        levels.pop("root", None)
        # env override PYCORS_LOGGING_LEVEL_ROOT wins over the mapping
        self.root_level = str(config.get("pycors.logging.level.root", "INFO")).upper()
        self.logger_levels = {name: str(level).upper() for name, level in levels.items()}
        self.logger_levels.setdefault(CORS_LOGGER, self.root_level)

        fmt = str(config.get("pycors.logging.format", "console")).lower()
        self.format = fmt if fmt in FORMATS else "console"

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # module-level proxies must pick up a later configure()
            cache_logger_on_first_use=False,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=self._stream or sys.stdout,
            level=_level(self.root_level),
            force=True,
        )
        for name, level in self.logger_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

    def _processors(self) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            escape_request_values,
        ]
        if self.format == "json":
            processors.append(structlog.processors.JSONRenderer(sort_keys=True))
        elif self.format == "logfmt":
            processors.append(structlog.processors.LogfmtRenderer(key_order=["timestamp", "level", "event"]))
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def _flatten(section: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    # {"pycors": {"cors": "DEBUG"}} -> {"pycors.cors": "DEBUG"}
    flat: dict[str, Any] = {}
    for key, value in section.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(_flatten(value, name))
        else:
            flat[name] = value
    return flat
