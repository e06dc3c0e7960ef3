import logging
from typing import Optional

from flask import Flask, Response, request

from .errors import UpstreamFailure
from .forwarder import Forwarder
from .router import handle

logger = logging.getLogger(__name__)


def create_app(forwarder: Optional[Forwarder] = None) -> Flask:
    """Build the Flask app that hosts the edge router.

    Every request, whatever its method or path, goes to `router.handle` from a
    `before_request` hook, so Flask's URL map never answers 404/405 itself.
    Upstream transport failures become `502 Bad Gateway` here.
    """
    app = Flask(__name__, static_folder=None)
    app.extensions["forwarder"] = forwarder or Forwarder()

    @app.before_request
    def edge():
        return handle(request, app.extensions["forwarder"])

    @app.errorhandler(UpstreamFailure)
    def upstream_failure(e):
        logger.error(f"Upstream failure for {request.method} {request.path}: {e}")
        return Response("Bad Gateway", status=502, mimetype="text/plain")

    return app
