"""Send the output of commands, pipes and JSON lines to a logging sink."""

from __future__ import annotations

import json
import logging
import os
import shlex
import socket
import subprocess
import threading
import time
from typing import IO, Any, Callable, Mapping, Sequence

logger = logging.getLogger(__name__)

Sink = Callable[[int, dict], None]


class CommandError(RuntimeError):
    """Raised when a command cannot be parsed, started, or exits unsuccessfully."""


def get_command(command: str) -> list[str]:
    """Split a shell-quoted command line into its arguments."""
    try:
        args = shlex.split(command, posix=True)
    except ValueError as err:
        raise CommandError(f"parsing command '{command}': {err}") from err
    if not args:
        raise CommandError("no command specified")
    return args


def _decode(line: bytes | str) -> str:
    if isinstance(line, bytes):
        return line.decode("utf-8", errors="replace")
    return line


def _strip_eol(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _default_sink(target: logging.Logger) -> Sink:
    def emit(level: int, message: dict) -> None:
        target.log(level, "%s", message, extra={"fields": message})

    return emit


class CommandLogger:
    """Turns lines of text or JSON into annotated messages and hands them to a sink.

    The sink is called with the log level and the message mapping. By default
    messages go to a standard library logger.
    """

    def __init__(
        self,
        sink: Sink | None = None,
        annotations: Mapping[str, str] | None = None,
        log_json: bool = False,
        add_meta: bool = False,
        level: int = logging.INFO,
    ) -> None:
        self.sink: Sink = sink or _default_sink(logging.getLogger("curator.buildlogger"))
        self.annotations: dict[str, str] = dict(annotations or {})
        self.log_json = log_json
        self.add_meta = add_meta
        self.level = level
        self._lock = threading.Lock()

    def _annotate(self, message: dict) -> dict:
        for key, value in self.annotations.items():
            if key in message:
                logger.error("cannot annotate message: key '%s' already exists", key)
                continue
            message[key] = value
        return message

    def _emit(self, message: dict) -> dict:
        with self._lock:
            self.sink(self.level, message)
        return message

    def log_line(self, line: bytes | str) -> dict:
        """Log one line as JSON or text, depending on the configured mode."""
        if self.log_json:
            return self.log_json_line(line)
        return self.log_text_line(line)

    def log_text_line(self, line: bytes | str) -> dict:
        """Log one line of text and return the message that was sent."""
        message = self._annotate({"message": _decode(line)})
        return self._emit(message)

    def log_json_line(self, line: bytes | str) -> dict:
        """Log one JSON document as fields and return the message that was sent.

        A line that is not a JSON object is reported and sent as empty fields.
        """
        text = _decode(line)
        fields: dict[str, Any] = {}
        try:
            parsed = json.loads(text)
        except ValueError as err:
            logger.error("parsing JSON line: %s", err)
        else:
            if isinstance(parsed, dict):
                fields = parsed
            else:
                logger.error("JSON line is not an object: %s", text)

        message = dict(fields)
        if self.add_meta:
            message.setdefault(
                "metadata",
                {
                    "level": logging.getLevelName(self.level),
                    "hostname": socket.gethostname(),
                    "pid": os.getpid(),
                    "time": time.time(),
                },
            )
        return self._emit(self._annotate(message))

    def _collect(self, stream: IO[bytes]) -> None:
        try:
            for raw in stream:
                self.log_line(_strip_eol(_decode(raw)))
        finally:
            stream.close()

    def run_command(self, args: Sequence[str]) -> None:
        """Run a command, logging every line of its standard output and error.

        Raises CommandError if the command cannot start or exits non-zero.
        """
        args = list(args)
        if not args:
            raise CommandError("no command specified")

        command = " ".join(args)
        logger.debug("prepping command %s", command)
        started = time.monotonic()
        try:
            proc = subprocess.Popen(
                args, stdout=subprocess.PIPE, stderr=subprocess.PIPE
            )
        except OSError as err:
            raise CommandError(f"starting command: {err}") from err

        logger.info("running command: %s", command)
        readers = [
            threading.Thread(target=self._collect, args=(proc.stdout,), daemon=True),
            threading.Thread(target=self._collect, args=(proc.stderr,), daemon=True),
        ]
        for reader in readers:
            reader.start()
        for reader in readers:
            reader.join()
        code = proc.wait()

        logger.info("completed command in %.3fs", time.monotonic() - started)
        if code != 0:
            raise CommandError(f"command returned an error: exit status {code}")

    def read_pipe(self, stream: IO[Any]) -> int:
        """Log every line read from a stream and return the number of lines."""
        count = 0
        try:
            for raw in stream:
                self.log_line(_strip_eol(_decode(raw)))
                count += 1
        except OSError as err:
            raise CommandError(f"reading from pipe: {err}") from err
        return count