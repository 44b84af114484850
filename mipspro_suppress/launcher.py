from __future__ import annotations

import os
import signal
import sys
from typing import BinaryIO, Callable, Protocol, Sequence

from mipspro_suppress.errors import EXIT_FAILURE, LaunchError

MESSAGE_PREFIX = "mipspro-suppress"


class Child(Protocol):
    pid: int
    stderr: BinaryIO

    def wait(self) -> int:
        """Block until the child terminates and return its raw wait status."""
        ...


Launcher = Callable[[str, Sequence[str]], Child]


class ForkedChild:
    def __init__(self, pid: int, stderr: BinaryIO) -> None:
        self.pid = pid
        self.stderr = stderr

    def wait(self) -> int:
        _, status = os.waitpid(self.pid, 0)
        return status


def _child_error(message: str) -> None:
    try:
        os.write(2, f"{MESSAGE_PREFIX}: {message}\n".encode("utf-8", errors="replace"))
    except OSError:
        pass


def _exec_child(read_fd: int, write_fd: int, path: str, argv: Sequence[str]) -> None:
    # Errors before dup2 go to the caller's stderr, exec errors go through the pipe.
    try:
        os.close(read_fd)
    except OSError as exc:
        _child_error(f"error closing read end of pipe in child: {exc.strerror}")
        return
    try:
        os.dup2(write_fd, 2)
    except OSError as exc:
        _child_error(f"error redirecting stderr in child: {exc.strerror}")
        return
    try:
        os.close(write_fd)
    except OSError as exc:
        _child_error(f"error closing write end of pipe in child: {exc.strerror}")
        return

    # Python ignores these; ignored dispositions would survive exec.
    for signame in ("SIGPIPE", "SIGXFSZ"):
        if hasattr(signal, signame):
            signal.signal(getattr(signal, signame), signal.SIG_DFL)

    try:
        os.execv(path, list(argv))
    except OSError as exc:
        _child_error(f"error executing command '{path}': {exc.strerror}")


def spawn(path: str, argv: Sequence[str]) -> ForkedChild:
    """
    Fork and exec `path` with `argv`, capturing the child's stderr.

    stdin and stdout are inherited untouched. The returned child's `stderr`
    is the read end of a pipe that reaches end-of-stream once the child (and
    anything it spawned that kept fd 2) has exited.
    """
    try:
        read_fd, write_fd = os.pipe()
    except OSError as exc:
        raise LaunchError(f"error creating pipe: {exc.strerror}") from exc

    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError, OSError):
            pass

    try:
        pid = os.fork()
    except OSError as exc:
        os.close(read_fd)
        os.close(write_fd)
        raise LaunchError(f"error forking process: {exc.strerror}") from exc

    if pid == 0:
        try:
            _exec_child(read_fd, write_fd, path, argv)
        finally:
            os._exit(EXIT_FAILURE)

    try:
        os.close(write_fd)
    except OSError as exc:
        os.close(read_fd)
        raise LaunchError(f"error closing write end of pipe in parent: {exc.strerror}") from exc
    return ForkedChild(pid, os.fdopen(read_fd, "rb"))
