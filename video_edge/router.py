"""Request routing for the edge proxy.

Rules, first match wins:
  1. `/api/short-video*`  -> forwarded to the video backend
  2. `/health`            -> local health payload, never forwarded
  3. anything else        -> 404 `Not Found`
"""
from .responses import health_response, not_found_response

VIDEO_API_PREFIX = "/api/short-video"
HEALTH_PATH = "/health"


def handle(request, forwarder):
    path = request.path

    if path.startswith(VIDEO_API_PREFIX):
        return forwarder.forward(request)

    if path == HEALTH_PATH:
        return health_response()

    return not_found_response()
