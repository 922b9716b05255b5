from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"

    @property
    def base_url(self) -> str:
        # Announced address, independent of the bind host
        return f"http://localhost:{self.port}"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from ``HOST``, ``PORT`` and ``LOG_LEVEL``."""
    env = os.environ if environ is None else environ
    raw_port = env.get("PORT") or "3000"
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
    return Settings(
        host=env.get("HOST") or "0.0.0.0",
        port=port,
        log_level=(env.get("LOG_LEVEL") or "info").lower(),
    )
