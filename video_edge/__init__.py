"""Edge proxy for the short-video generation backend."""
from .app import create_app
from .config import DEFAULT_BACKEND_URL, ProxyConfig, resolve_backend_url
from .errors import UpstreamFailure

__version__ = "0.1.0"

__all__ = [
    "create_app",
    "DEFAULT_BACKEND_URL",
    "ProxyConfig",
    "resolve_backend_url",
    "UpstreamFailure",
]
