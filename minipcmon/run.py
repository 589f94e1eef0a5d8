from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import socket
import sys
import traceback

import uvicorn

from minipcmon.core import config as core_config
from minipcmon.core.logging import setup_logging

logger = logging.getLogger(__name__)


def _bind_listen_socket(host: str, port: int) -> tuple[socket.socket, int]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen(2048)
        chosen_port = int(sock.getsockname()[1])
        return sock, chosen_port
    except Exception:
        sock.close()
        raise


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="minipcmon", add_help=True)
    parser.add_argument("--host", default=core_config.HOST, help="Address to bind.")
    parser.add_argument(
        "--port",
        type=int,
        default=core_config.PORT,
        help="Port to bind. Use 0 to choose a free port.",
    )
    parser.add_argument(
        "--log-level",
        default=core_config.LOG_LEVEL,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.port < 0 or args.port > 65535:
        raise ValueError("--port must be in range 0..65535")

    setup_logging(args.log_level)

    listen_sock, chosen_port = _bind_listen_socket(args.host, int(args.port))

    from minipcmon.main import app as fastapi_app

    config = uvicorn.Config(
        fastapi_app,
        host=args.host,
        port=chosen_port,
        log_level=str(args.log_level).lower(),
        access_log=False,
    )
    server = uvicorn.Server(config)
    logger.info("Dashboard listening on http://%s:%d", args.host, chosen_port)

    def _handle_term(*_args: object) -> None:
        server.should_exit = True

    signal.signal(signal.SIGTERM, _handle_term)
    signal.signal(signal.SIGINT, _handle_term)

    try:
        asyncio.run(server.serve(sockets=[listen_sock]))
    finally:
        listen_sock.close()


def cli() -> None:
    try:
        main()
    except SystemExit:
        raise
    except Exception:
        traceback.print_exc(file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
