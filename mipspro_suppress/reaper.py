from __future__ import annotations

import os
import sys
from typing import TextIO

from mipspro_suppress.errors import EXIT_FAILURE, ReapError
from mipspro_suppress.launcher import MESSAGE_PREFIX, Child


def exit_code_from_status(status: int, err: TextIO | None = None) -> int:
    if err is None:
        err = sys.stderr
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    if os.WIFSIGNALED(status):
        print(f"{MESSAGE_PREFIX}: child process terminated by signal {os.WTERMSIG(status)}.", file=err)
        return EXIT_FAILURE
    print(f"{MESSAGE_PREFIX}: child process terminated abnormally.", file=err)
    return EXIT_FAILURE


def reap(child: Child, err: TextIO | None = None) -> int:
    try:
        status = child.wait()
    except OSError as exc:
        raise ReapError(f"error waiting for child process: {exc.strerror}") from exc
    return exit_code_from_status(status, err)
