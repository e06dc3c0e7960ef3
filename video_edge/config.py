import os
from dataclasses import dataclass

DEFAULT_BACKEND_URL = "https://shirt-video-maker.app.northflank.com"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787


def _env(name: str, default: str) -> str:
    # empty values count as unset
    return os.getenv(name) or default


@dataclass(frozen=True)
class ProxyConfig:
    """Runtime settings for the edge proxy.

    Environment variables:
    - `NORTHFLANK_SERVICE_URL`: base URL of the video backend (default
      `DEFAULT_BACKEND_URL` when unset or empty).
    - `EDGE_PROXY_HOST` / `EDGE_PROXY_PORT`: where the dev server listens.
    - `LOG_LEVEL`: logging level name for the entry point.
    """

    backend_url: str = DEFAULT_BACKEND_URL
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ProxyConfig":
        return cls(
            backend_url=_env("NORTHFLANK_SERVICE_URL", DEFAULT_BACKEND_URL),
            host=_env("EDGE_PROXY_HOST", DEFAULT_HOST),
            port=int(_env("EDGE_PROXY_PORT", str(DEFAULT_PORT))),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )


def resolve_backend_url() -> str:
    """Return the backend base URL from the current environment."""
    return _env("NORTHFLANK_SERVICE_URL", DEFAULT_BACKEND_URL)
