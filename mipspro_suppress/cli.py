from __future__ import annotations

import argparse
import signal
import sys
from typing import BinaryIO, Sequence

from mipspro_suppress.config import load_config
from mipspro_suppress.errors import EXIT_FAILURE, UsageError, WrapperError
from mipspro_suppress.launcher import MESSAGE_PREFIX, Launcher, spawn
from mipspro_suppress.reaper import reap
from mipspro_suppress.resolver import build_argv, invocation_name, resolve_target
from mipspro_suppress.stderr_filter import relay

WRAPPER_NAME = "mipspro-suppress"


class DirectArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        raise UsageError(message)


def parse_direct_args(args: Sequence[str]) -> argparse.Namespace:
    parser = DirectArgumentParser(
        prog=WRAPPER_NAME,
        description="Run a MIPSpro tool with its license-check warnings removed from stderr.",
    )
    parser.add_argument("--config", help="Path to mipspro-suppress.yaml")
    parser.add_argument(
        "--target-dir",
        dest="target_dir",
        help="Directory holding the real tools (default: /usr/bin/)",
    )
    parser.add_argument("name", help="Tool to run, e.g. cc or f77")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments passed to the tool")
    return parser.parse_args(list(args))


def run(
    name: str,
    argv: Sequence[str],
    config_path: str | None = None,
    target_dir: str | None = None,
    launcher: Launcher = spawn,
    sink: BinaryIO | None = None,
) -> int:
    cfg = load_config(config_path, target_dir)
    path = resolve_target(name, cfg.target_dir)
    child = launcher(path, build_argv(path, argv))
    with child.stderr:
        relay(child.stderr, sink or sys.stderr.buffer)
    return reap(child)


def main(
    argv: Sequence[str] | None = None,
    launcher: Launcher = spawn,
    sink: BinaryIO | None = None,
) -> int:
    """
    Entry point for both deployment styles.

    Invoked through a link named after a tool (`cc`, `f77`, ...) every
    argument is passed through untouched. Invoked as `mipspro-suppress`, the
    first positional argument names the tool and wrapper options may precede
    it.
    """
    argv = list(sys.argv if argv is None else argv)
    # Die on ^C like the wrapped tool does instead of raising KeyboardInterrupt.
    signal.signal(signal.SIGINT, signal.SIG_DFL)

    name = invocation_name(argv[0]) if argv else ""
    config_path = None
    target_dir = None
    try:
        if name == WRAPPER_NAME:
            args = parse_direct_args(argv[1:])
            name = args.name
            argv = [args.name, *args.args]
            config_path = args.config
            target_dir = args.target_dir
        return run(name, argv, config_path, target_dir, launcher=launcher, sink=sink)
    except WrapperError as exc:
        print(f"{MESSAGE_PREFIX}: {exc}", file=sys.stderr)
        return EXIT_FAILURE
