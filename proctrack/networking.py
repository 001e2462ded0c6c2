"""Accepting the control connection from a client."""

from __future__ import annotations

import os
import socket

DEFAULT_PORT = 12345


class NetworkError(RuntimeError):
    """Raised when a client connection cannot be established."""


def accept_client(host: str = "", port: int = DEFAULT_PORT) -> socket.socket:
    """Listen on ``host``:``port`` and return the first client that connects.

    The listening socket is closed once the client is accepted.
    """
    try:
        listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    except OSError as exc:
        raise NetworkError(f"cannot create socket: {exc}") from exc

    with listener:
        try:
            if os.name != "nt":
                listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            listener.bind((host, port))
        except OSError as exc:
            raise NetworkError(f"cannot bind to {host or '*'}:{port}: {exc}") from exc
        try:
            listener.listen(1)
        except OSError as exc:
            raise NetworkError(f"cannot listen on port {port}: {exc}") from exc
        try:
            client, _ = listener.accept()
        except OSError as exc:
            raise NetworkError(f"cannot accept a client: {exc}") from exc
    return client