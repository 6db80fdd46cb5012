"""Main HTTP server entry point and connection lifecycle orchestration."""

from __future__ import annotations

import argparse
import logging
import os
import re
import socket
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from config import (
    ACCEPT_TIMEOUT_SECS,
    DEFAULT_ROOT,
    HOST,
    LISTEN_BACKLOG,
    PORT,
    SOCKET_TIMEOUT_SECS,
    WORKER_COUNT,
)
from handlers.files import internal_error_response, serve_path
from request import HTTPRequest, HTTPRequestParseError
from response import HTTPResponse, plain_response
from socket_handler import HTTPReadError, read_http_request, write_http_response
from thread_pool import ThreadPool

logger = logging.getLogger(__name__)

LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")


class _BelowLevelFilter(logging.Filter):
    def __init__(self, level: int) -> None:
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def configure_logging(level: int = logging.INFO) -> None:
    """Send informational records to stdout and warnings and errors to stderr."""
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowLevelFilter(logging.WARNING))
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )


class HTTPServer:
    def __init__(
        self,
        host: str = HOST,
        port: int = PORT,
        root: str | os.PathLike[str] = DEFAULT_ROOT,
        worker_count: int = WORKER_COUNT,
    ) -> None:
        self.host = host
        self.port = port
        self.root = Path(root)
        self.worker_count = worker_count

        self._server_socket: socket.socket | None = None
        self._pool: ThreadPool | None = None
        self._running = False

    def start(self) -> bool:
        """Serve until ``stop()``; returns False if the port cannot be bound."""
        requested_port = self.port
        server_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            server_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server_socket.bind((self.host, self.port))
            server_socket.listen(LISTEN_BACKLOG)
        except OSError as exc:
            server_socket.close()
            logger.error("Error starting server on port %s. %s", requested_port, exc)
            return False

        with server_socket:
            self._server_socket = server_socket
            server_socket.settimeout(ACCEPT_TIMEOUT_SECS)
            self.port = server_socket.getsockname()[1]
            self._pool = ThreadPool(worker_count=self.worker_count, handler=self._handle_client)
            self._pool.start()
            logger.info("Listening on port %s", self.port)

            self._running = True
            try:
                while self._running:
                    try:
                        client_socket, address = server_socket.accept()
                    except socket.timeout:
                        continue
                    except OSError:
                        break

                    if self._pool is None or not self._pool.submit(client_socket, address):
                        client_socket.close()
            finally:
                if self._pool is not None:
                    self._pool.shutdown()
                    self._pool = None
        return True

    def stop(self) -> None:
        self._running = False
        if self._server_socket is not None:
            self._server_socket.close()
            self._server_socket = None
        if self._pool is not None:
            self._pool.shutdown()
            self._pool = None

    def _handle_client(self, client_socket: socket.socket, address: tuple[str, int]) -> None:
        with client_socket:
            client_socket.settimeout(SOCKET_TIMEOUT_SECS)
            started_at = time.perf_counter()
            method, target = "-", "-"
            try:
                raw_request = read_http_request(client_socket)
            except HTTPReadError as exc:
                logger.warning("Rejected request from %s: %s", address[0], exc)
                response = plain_response(exc.status_code)
            except OSError:
                return
            else:
                if not raw_request:
                    return
                try:
                    request = HTTPRequest.from_bytes(raw_request)
                except HTTPRequestParseError as exc:
                    logger.warning("Rejected request from %s: %s", address[0], exc)
                    response = plain_response(exc.status_code)
                else:
                    method, target = request.method, request.raw_target
                    response = self._dispatch(request)

            response.headers.setdefault("Connection", "close")
            try:
                bytes_sent = write_http_response(client_socket, response)
            except OSError as exc:
                logger.warning("Failed to write response to %s: %s", address[0], exc)
                return

            logger.debug(
                "client=%s method=%s target=%s status=%s bytes_out=%s duration_ms=%.2f",
                address[0],
                method,
                target,
                response.status_code,
                bytes_sent,
                (time.perf_counter() - started_at) * 1000,
            )

    def _dispatch(self, request: HTTPRequest) -> HTTPResponse:
        try:
            return serve_path(request, self.root)
        except Exception as exc:
            logger.exception("Unhandled error while serving %s", request.raw_target)
            return internal_error_response(exc)


def parse_port(value: str | None, default: int = PORT) -> int:
    """Parse leading digits as a TCP port; missing or bad values give ``default``."""
    if value is None:
        return default
    match = LEADING_INTEGER.match(value)
    if match is None:
        return default
    port = int(match.group(1))
    if not 0 < port < 65536:
        return default
    return port


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve the current directory over HTTP with directory listings",
    )
    parser.add_argument("-p", dest="port", metavar="PORT", nargs="?", default=None)
    args, _unknown = parser.parse_known_args(argv)
    args.port = parse_port(args.port)
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()
    server = HTTPServer(port=args.port)
    try:
        started = server.start()
    except KeyboardInterrupt:
        server.stop()
        return 0
    return 0 if started else 1


if __name__ == "__main__":
    sys.exit(main())
