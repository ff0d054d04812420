""" This module contains the local gallery server. """

import errno
import socket
from logging import Logger
from pathlib import Path

from flask import Flask, jsonify, send_from_directory

from faptopia.fourchan import FourChan, parse_thread_id
from faptopia.typing_custom import InvalidQueryError
from faptopia.utils import NullLogger


class PortInUseError(OSError):
    """ Raised when the server can't bind its port. """


def _error(status: int, message: str):
    return jsonify({"success": False, "error": message}), status


def create_app(root: Path, fourchan: FourChan, logger: Logger | None = None) -> Flask:
    """
    Creates the server application.

    Files are served from root, with index.html standing in for "/". The thread API lets the
    served page pull in the videos of further threads.
    """
    logger = logger if logger is not None else NullLogger()
    root = root.resolve()
    app = Flask(__name__, static_folder=None)

    @app.after_request
    def allow_any_origin(response):
        if response.mimetype == "application/json":
            response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @app.get("/api/thread/<thread_id>")
    def thread(thread_id: str):
        try:
            thread_number = parse_thread_id(thread_id)
        except InvalidQueryError:
            return _error(400, "Invalid thread ID")

        batch = fourchan.fetch([thread_number])
        if not batch.ok():
            return _error(500, "Failed to fetch thread data")

        logger.info("✅ Served %d videos of thread %s", len(batch.results), thread_number)
        return jsonify({"success": True, "videos": batch.results})

    @app.get("/")
    def index():
        return send_from_directory(root, "index.html")

    @app.get("/<path:path>")
    def static_file(path: str):
        return send_from_directory(root, path)

    return app


def ensure_port_available(host: str, port: int) -> None:
    """ Raises PortInUseError if nothing can listen on the given address. """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as probe:
        probe.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            probe.bind((host, port))
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                raise PortInUseError(
                    e.errno, f"Port {port} is already in use. Try a different port with --port"
                ) from e
            raise


def serve(app: Flask, host: str = "127.0.0.1", port: int = 8080) -> None:
    """ Runs the application until interrupted. """
    ensure_port_available(host, port)
    app.run(host=host, port=port)
