"""Configuration for the YOLP client.

Settings come from keyword arguments or, through :meth:`ClientConfig.from_env`,
from environment variables:

- ``YOLP_APPID``: application id appended to every request (required)
- ``YOLP_TIMEOUT``: request timeout in seconds handed to ``requests``
- ``YOLP_DEBUG_RESPONSES``: set to ``1`` to log response previews
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError


def env(name: str, default: str | None = None) -> str:
    """Fetch environment variables while allowing explicit defaults."""

    value = os.environ.get(name, default)
    if value is None:
        raise ConfigurationError(f"Environment variable {name} is required")
    return value


@dataclass
class RequestConfig:
    timeout: Optional[float] = None
    debug_responses: bool = False


@dataclass
class ClientConfig:
    app_id: str
    request: RequestConfig = field(default_factory=RequestConfig)

    @classmethod
    def from_env(cls) -> "ClientConfig":
        app_id = env("YOLP_APPID")
        if not app_id:
            raise ConfigurationError("Environment variable YOLP_APPID must not be empty")
        raw_timeout = env("YOLP_TIMEOUT", "")
        timeout: Optional[float] = None
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(f"YOLP_TIMEOUT must be a number, got {raw_timeout!r}") from exc
            if timeout <= 0:
                raise ConfigurationError("YOLP_TIMEOUT must be greater than 0")
        debug_responses = env("YOLP_DEBUG_RESPONSES", "0") == "1"
        return cls(app_id=app_id, request=RequestConfig(timeout=timeout, debug_responses=debug_responses))


__all__ = ["ClientConfig", "RequestConfig", "env"]
