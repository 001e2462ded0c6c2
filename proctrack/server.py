"""The tracker service: periodic state updates plus a client control loop."""

from __future__ import annotations

import argparse
import json
import logging
import socket
import threading
from collections import deque

from proctrack.commands import Command, CommandType, InvalidCommandError, command_from_json
from proctrack.networking import DEFAULT_PORT, NetworkError, accept_client
from proctrack.state import DEFAULT_DATA_FILE, StateError, TrackerState

logger = logging.getLogger(__name__)

REPLY_INVALID = "Invalid command"
REPLY_QUIT = "Client disconnected."
REPLY_SHUTDOWN = "Stopped tracking."
REPLY_TRACK = "The provided process will be added to the list of tracked processes."
REPLY_UNTRACK = "The provided process will be removed from the list of tracked processes."

_RECEIVE_SIZE = 512


class Server:
    """Serves one client at a time and applies its commands to the state."""

    def __init__(self, state: TrackerState, host: str = "", port: int = DEFAULT_PORT) -> None:
        self.state = state
        self.host = host
        self.port = port
        self.pending: deque[Command] = deque()
        self._lock = threading.RLock()
        self._stopped = threading.Event()
        self._client: socket.socket | None = None
        self._drop_after_reply = False
        self._failure: NetworkError | None = None

    @property
    def running(self) -> bool:
        return not self._stopped.is_set()

    def handle_message(self, message: str | bytes) -> str:
        """Act on one client message and return the reply to send back."""
        try:
            command = command_from_json(message)
        except InvalidCommandError as exc:
            logger.info("Rejected message: %s", exc)
            return REPLY_INVALID

        if command.type is CommandType.REPORT:
            with self._lock:
                return json.dumps(self.state.report(), indent=4)
        if command.type is CommandType.QUIT:
            self._drop_after_reply = True
            return REPLY_QUIT
        if command.type is CommandType.SHUTDOWN:
            self._drop_after_reply = True
            self._stopped.set()
            return REPLY_SHUTDOWN
        self.pending.append(command)
        return REPLY_TRACK if command.type is CommandType.TRACK else REPLY_UNTRACK

    def process_pending(self) -> Command | None:
        """Apply the oldest queued track or untrack command, if any."""
        try:
            command = self.pending.popleft()
        except IndexError:
            return None
        with self._lock:
            try:
                if command.type is CommandType.TRACK:
                    self.state.add_process_to_track(command.path)
                else:
                    self.state.remove_process_from_track(command.path)
            except StateError as exc:
                logger.warning("Command %s for %r failed: %s", command.type.name, command.path, exc)
        return command

    def client_loop(self) -> None:
        """Accept clients and answer their messages until shut down."""
        while self.running:
            if self._client is None:
                logger.info("Waiting for a new connection with a client.")
                try:
                    self._client = accept_client(self.host, self.port)
                except NetworkError as exc:
                    logger.error("%s", exc)
                    self._failure = exc
                    self._stopped.set()
                    return
                logger.info("Client connected.")

            try:
                message = self._client.recv(_RECEIVE_SIZE)
            except OSError:
                message = b""
            if not message:
                logger.info("Client went away.")
                self._drop_client()
                continue

            logger.info("Received a message of %d bytes.", len(message))
            reply = self.handle_message(message)
            try:
                self._client.sendall(reply.encode("utf-8"))
            except OSError as exc:
                logger.warning("Cannot send reply: %s", exc)
                self._drop_after_reply = True
            if self._drop_after_reply:
                self._drop_client()

            with self._lock:
                self.state.save()
            logger.info("Saved data to file.")

    def _drop_client(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._drop_after_reply = False

    def run(self, interval: float = 3.0) -> None:
        """Run until a client sends shutdown, updating every ``interval`` seconds."""
        try:
            self.state.set_up_on_startup()
        except StateError as exc:
            logger.error("Cannot load saved state: %s", exc)
        with self._lock:
            self.state.update_state()
        logger.info("Done setting up.")

        client_thread = threading.Thread(target=self.client_loop, daemon=True)
        client_thread.start()

        tick = 1
        while not self._stopped.wait(interval):
            logger.info("Update %d", tick)
            tick += 1
            with self._lock:
                self.state.update_state()
            self.process_pending()

        if self._failure is not None:
            raise self._failure


def main(argv: list[str] | None = None) -> int:
    """Start the tracker service."""
    parser = argparse.ArgumentParser(prog="proctrack", description="Track running processes.")
    parser.add_argument("--host", default="", help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--data-file", default=DEFAULT_DATA_FILE, help="where tracked processes are kept")
    parser.add_argument("--interval", type=float, default=3.0, help="seconds between updates")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    server = Server(TrackerState(args.data_file), args.host, args.port)
    try:
        server.run(args.interval)
    except NetworkError as exc:
        logger.error("Stopping: %s", exc)
        return 1
    return 0