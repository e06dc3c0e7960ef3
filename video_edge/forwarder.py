import logging
from http.cookiejar import DefaultCookiePolicy
from typing import Iterator, Optional
from urllib.parse import quote

import requests
from werkzeug.datastructures import Headers

from .config import resolve_backend_url
from .errors import UpstreamFailure
from .responses import CACHE_HEADERS, UpstreamResponse, is_cacheable, with_header_overrides

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# RFC 3986 pchar characters, without "%"
PATH_SAFE = "/:@!$&'()*+,;=-._~"

HOP_BY_HOP_HEADERS = frozenset(
    [
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    ]
)


def is_hop_by_hop_header(name: str) -> bool:
    return name.lower() in HOP_BY_HOP_HEADERS


def _iter_body(stream, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        yield chunk


class Forwarder:
    """Relays `/api/short-video*` requests to the video backend.

    Behavior:
    - The backend base URL is resolved from the environment on every call.
    - Method, headers (minus `Host` and hop-by-hop headers), path, query string
      and body go out unchanged. Bodies are streamed in both directions.
    - There is no retry and no timeout. Transport errors surface as
      `UpstreamFailure`.
    - Successful GET responses get `CACHE_HEADERS`. Everything else is returned
      exactly as relayed.
    """

    def __init__(self, session: Optional[requests.Session] = None):
        if session is None:
            session = requests.Session()
            # backend cookies belong to the end client, not to this shared session
            session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        self.session = session

    def raw_path(self, request) -> str:
        """Path as the client sent it, percent-escapes intact."""
        raw = request.environ.get("RAW_URI") or request.environ.get("REQUEST_URI")
        if raw and raw.startswith("/"):
            return raw.partition("?")[0]
        return quote(request.path, safe=PATH_SAFE)

    def build_url(self, request) -> str:
        url = resolve_backend_url().rstrip("/") + self.raw_path(request)
        query = request.query_string.decode("latin-1")
        if query:
            url = f"{url}?{query}"
        return url

    def _outbound_headers(self, request) -> dict:
        return {
            name: value
            for name, value in request.headers.items()
            if name.lower() != "host" and not is_hop_by_hop_header(name)
        }

    def _outbound_body(self, request):
        if request.content_length:
            return _iter_body(request.stream)
        if "chunked" in request.headers.get("Transfer-Encoding", "").lower():
            return _iter_body(request.stream)
        return None

    def prepare(self, request) -> requests.PreparedRequest:
        prepared = requests.Request(
            method=request.method,
            url=self.build_url(request),
            headers=self._outbound_headers(request),
            data=self._outbound_body(request),
        ).prepare()
        # requests marks every iterator body as chunked; keep the client's length instead
        if "Content-Length" in prepared.headers:
            prepared.headers.pop("Transfer-Encoding", None)
        return prepared

    def relay(self, request) -> UpstreamResponse:
        prepared = self.prepare(request)
        logger.debug(f"Forwarding {prepared.method} {prepared.url}")
        try:
            upstream = self.session.send(prepared, stream=True, allow_redirects=False, timeout=None)
        except requests.RequestException as e:
            raise UpstreamFailure(prepared.url, e) from e

        headers = Headers([(k, v) for k, v in upstream.raw.headers.iteritems() if not is_hop_by_hop_header(k)])
        response = UpstreamResponse(
            upstream.raw.stream(CHUNK_SIZE, decode_content=False),
            status=upstream.status_code,
            headers=headers,
        )
        response.call_on_close(upstream.close)
        logger.debug(f"Backend answered {upstream.status_code} for {prepared.method} {prepared.url}")
        return response

    def forward(self, request):
        response = self.relay(request)
        if is_cacheable(request.method, response.status_code):
            return with_header_overrides(response, CACHE_HEADERS)
        return response
