from __future__ import annotations

import enum
from typing import BinaryIO, Iterable, Iterator

from mipspro_suppress.errors import FilterError

MSG_CANNOT_FIND_SERVER = (
    b"Cannot find SERVER hostname in network database (-14,7:2) No such file or directory"
)
MSG_NO_SUCH_FEATURE = b"No such feature exists (-5,116)"
MSG_GRAPHICS_SUPPORT_CUSTOMER = (
    b"Graphics support customer then contact your local support provider."
)

TRIGGERS = frozenset({MSG_CANNOT_FIND_SERVER, MSG_NO_SUCH_FEATURE})


class State(enum.Enum):
    PASSING = "passing"
    SUPPRESSING = "suppressing"
    # The line right after the closing marker; always dropped.
    SEPARATOR = "separator"


class SuppressionFilter:
    """
    Drop the license-failure block the MIPSpro tools print on stderr.

    The block opens with one of the two trigger lines and closes with the
    "Graphics support customer" line plus exactly one following line (a blank
    separator in every observed output). Only the first block is dropped:
    once `triggered` is set, later trigger lines pass through like any other
    diagnostic. Lines are compared as bytes without their trailing newline.
    """

    def __init__(self) -> None:
        self.state = State.PASSING
        self.triggered = False

    def feed(self, line: bytes) -> bytes | None:
        """Consume one line; return it (newline-terminated) if it should be emitted."""
        if line.endswith(b"\n"):
            line = line[:-1]

        if not self.triggered and line in TRIGGERS:
            self.triggered = True
            self.state = State.SUPPRESSING
            return None

        if self.state is State.PASSING:
            return line + b"\n"
        if self.state is State.SEPARATOR:
            self.state = State.PASSING
            return None
        if line == MSG_GRAPHICS_SUPPORT_CUSTOMER:
            self.state = State.SEPARATOR
        return None


def filter_lines(lines: Iterable[bytes]) -> Iterator[bytes]:
    line_filter = SuppressionFilter()
    for line in lines:
        out = line_filter.feed(line)
        if out is not None:
            yield out


def relay(source: BinaryIO, sink: BinaryIO) -> None:
    """Copy `source` to `sink` line by line through the filter until end-of-stream."""
    line_filter = SuppressionFilter()
    while True:
        try:
            line = source.readline()
        except OSError as exc:
            raise FilterError(f"error reading from pipe: {exc}") from exc
        if not line:
            return
        out = line_filter.feed(line)
        if out is None:
            continue
        try:
            sink.write(out)
            sink.flush()
        except OSError as exc:
            raise FilterError(f"error writing to stderr: {exc}") from exc
