"""Connection and page settings.

Values come from defaults, then ``NEWFOR_*`` environment variables, then
explicit overrides (the server's command-line flags).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any

from .models.page import PageNumber
from .protocol.variants import VARIANTS
from .transport.tcp_connection import DEFAULT_HOST, DEFAULT_PORT

DEFAULT_PAGE = "888"
DEFAULT_VARIANT = "newfor"

ENV_PREFIX = "NEWFOR_"


@dataclass(frozen=True)
class NewforConfig:
    """Settings for one receiver session."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    page: str = DEFAULT_PAGE
    variant: str = DEFAULT_VARIANT
    timeout: float | None = None

    def __post_init__(self) -> None:
        if not 0 < self.port <= 65535:
            raise ValueError(f"Port must be 1-65535, got {self.port}")
        PageNumber.parse(self.page)
        if self.variant not in VARIANTS:
            raise ValueError(
                f"Unknown protocol variant '{self.variant}'. Valid: {list(VARIANTS)}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> NewforConfig:
        """Build a config from ``NEWFOR_HOST``, ``NEWFOR_PORT`` and friends."""
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if env.get(ENV_PREFIX + "HOST"):
            values["host"] = env[ENV_PREFIX + "HOST"]
        if env.get(ENV_PREFIX + "PORT"):
            values["port"] = int(env[ENV_PREFIX + "PORT"])
        if env.get(ENV_PREFIX + "PAGE"):
            values["page"] = env[ENV_PREFIX + "PAGE"]
        if env.get(ENV_PREFIX + "VARIANT"):
            values["variant"] = env[ENV_PREFIX + "VARIANT"]
        if env.get(ENV_PREFIX + "TIMEOUT"):
            values["timeout"] = float(env[ENV_PREFIX + "TIMEOUT"])
        return cls(**values)

    def with_overrides(self, **overrides: Any) -> NewforConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "page": self.page,
            "variant": self.variant,
            "timeout": self.timeout,
        }
