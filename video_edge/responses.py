"""Response helpers shared by the router and the forwarder."""
import json
from typing import Mapping

from flask import Response
from werkzeug.datastructures import Headers

CACHE_HEADERS = {
    "Cache-Control": "public, max-age=3600",
    # Advisory only: nothing here looks anything up in a cache.
    "CF-Cache-Status": "HIT",
}

HEALTH_PAYLOAD = {"status": "ok", "worker": "active"}


class UpstreamResponse(Response):
    """Response relayed from the backend.

    Never adds a default Content-Type, so the headers are exactly the ones the
    backend sent.
    """

    default_mimetype = None


def is_cacheable(method: str, status_code: int) -> bool:
    return method == "GET" and 200 <= status_code <= 299


def with_header_overrides(response: Response, overrides: Mapping[str, str]) -> Response:
    """Derive a new response carrying `overrides` on top of a copy of the headers.

    The body iterable is shared, not re-read, and the source response is left
    untouched. Closing the derived response closes the source.
    """
    headers = Headers(response.headers)
    for name, value in overrides.items():
        headers.set(name, value)

    derived = type(response)(response.response, status=response.status, headers=headers)
    derived.direct_passthrough = response.direct_passthrough
    derived.call_on_close(response.close)
    return derived


def health_response() -> Response:
    body = json.dumps(HEALTH_PAYLOAD, separators=(",", ":"))
    return Response(body, status=200, mimetype="application/json")


def not_found_response() -> Response:
    return Response("Not Found", status=404, mimetype="text/plain")
