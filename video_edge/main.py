"""Run the edge proxy.

Run as a module: `python -m video_edge.main` (or the `video-edge` script).
Settings come from the environment; a `.env` file in the working directory is
loaded first without overriding variables that are already set.
"""
import argparse
import logging
import sys
from dataclasses import replace

from dotenv import find_dotenv, load_dotenv

from .app import create_app
from .config import ProxyConfig

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edge proxy for the short-video backend")
    parser.add_argument("--host", help="Interface to bind (env EDGE_PROXY_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (env EDGE_PROXY_PORT)")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (env LOG_LEVEL)")
    parser.add_argument("--env-file", dest="env_file", help="Path to a dotenv file to load instead of ./.env")
    return parser


def load_config(args) -> ProxyConfig:
    if args.env_file:
        load_dotenv(dotenv_path=args.env_file)
    else:
        load_dotenv(find_dotenv(usecwd=True))

    config = ProxyConfig.from_env()
    overrides = {k: v for k, v in (("host", args.host), ("port", args.port)) if v is not None}
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    return replace(config, **overrides)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args)

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Edge proxy listening on {config.host}:{config.port}, forwarding to {config.backend_url}")

    app = create_app()
    app.run(host=config.host, port=config.port, threaded=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
