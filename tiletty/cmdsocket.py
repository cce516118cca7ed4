"""A Unix domain socket through which other processes send commands to a shell."""

from __future__ import annotations

import errno
import re
import socket
from pathlib import Path
from types import TracebackType

DEFAULT_DIRECTORY = "/tmp"
_BUFFER_SIZE = 255
_INTEGER = re.compile(r"[+-]?\d+")


def socket_path(pid: int, directory: str | Path = DEFAULT_DIRECTORY) -> Path:
    """The socket file belonging to the shell with process id ``pid``."""
    return Path(directory) / f"nhtty_{pid}.uds"


def _leading_integer(data: bytes) -> int:
    text = data.split(b"\0", 1)[0].decode("ascii", "replace")
    match = _INTEGER.match(text.lstrip(" \t\n\r\v\f"))
    return int(match.group()) if match else 0


class CommandSocket:
    """A listening, non-blocking socket that receives numeric commands."""

    def __init__(self, pid: int, directory: str | Path = DEFAULT_DIRECTORY) -> None:
        self.pid = pid
        self.path = socket_path(pid, directory)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.setblocking(False)
            self.path.unlink(missing_ok=True)
            sock.bind(str(self.path))
            sock.listen(5)
        except OSError:
            sock.close()
            raise
        self._sock: socket.socket | None = sock

    def poll(self) -> int | None:
        """Accept one pending connection and return the command it sent.

        Returns ``None`` when nobody is waiting or nothing was sent. Text
        that does not start with a number reads as command 0.
        """
        if self._sock is None:
            raise ValueError("command socket is closed")
        try:
            conn, _ = self._sock.accept()
        except (BlockingIOError, InterruptedError):
            return None
        with conn:
            conn.setblocking(True)
            data = conn.recv(_BUFFER_SIZE - 1)
        return _leading_integer(data) if data else None

    def close(self) -> None:
        """Stop listening and remove the socket file."""
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        self.path.unlink(missing_ok=True)

    def __enter__(self) -> CommandSocket:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()


def send_command(
    pid: int, command: int, directory: str | Path = DEFAULT_DIRECTORY
) -> None:
    """Send ``command`` to the shell with process id ``pid``."""
    path = socket_path(pid, directory)
    if not path.exists():
        raise FileNotFoundError(errno.ENOENT, "no command socket", str(path))
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(str(path))
        sock.sendall(str(int(command)).encode("ascii"))