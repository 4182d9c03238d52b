"""
Connection settings for the optional Valkey cache backend.

Settings come either from the application config (the normal path through
``build_cache_backend``) or straight from ``VALKEY_*`` environment variables.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..utils.config import AppConfig

load_dotenv()


@dataclass
class ValkeyConfig:
    """Where the shared cache lives and which key namespace it owns."""

    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    database: int = 0
    socket_timeout: float = 5.0
    namespace: str = "country"

    @classmethod
    def from_env(cls) -> "ValkeyConfig":
        """Read ``VALKEY_HOST``, ``VALKEY_PORT``, ``VALKEY_PASSWORD``, ``VALKEY_DATABASE`` and ``VALKEY_SOCKET_TIMEOUT``."""
        return cls(
            host=os.getenv("VALKEY_HOST", "localhost"),
            port=int(os.getenv("VALKEY_PORT", "6379")),
            password=os.getenv("VALKEY_PASSWORD") or None,
            database=int(os.getenv("VALKEY_DATABASE", "0")),
            socket_timeout=float(os.getenv("VALKEY_SOCKET_TIMEOUT", "5.0")),
        )

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "ValkeyConfig":
        """Take the ``valkey_*`` fields of an already validated AppConfig."""
        return cls(
            host=config.valkey_host,
            port=config.valkey_port,
            password=config.valkey_password,
            database=config.valkey_database,
            socket_timeout=config.valkey_socket_timeout,
        )

    def to_connection_kwargs(self) -> Dict[str, Any]:
        """
        Keyword arguments for ``valkey.asyncio.Valkey``.

        Responses are decoded so backends exchange ``str`` payloads.
        """
        kwargs: Dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "db": self.database,
            "socket_timeout": self.socket_timeout,
            "socket_connect_timeout": self.socket_timeout,
            "decode_responses": True,
        }
        if self.password:
            kwargs["password"] = self.password
        return kwargs

    def __str__(self) -> str:
        # Never log the password
        secret = "***" if self.password else "None"
        return (
            f"ValkeyConfig(host={self.host}, port={self.port}, db={self.database}, "
            f"namespace={self.namespace}, password={secret})"
        )
