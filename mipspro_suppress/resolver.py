from __future__ import annotations

import os
from typing import Sequence

from mipspro_suppress.errors import PathTooLong, TargetNotExecutable

# Matches PATH_MAX from <linux/limits.h>, including the terminating NUL.
PATH_MAX = 4096


def invocation_name(argv0: str) -> str:
    return os.path.basename(argv0)


def target_path(name: str, target_dir: str) -> str:
    if target_dir.endswith("/"):
        return target_dir + name
    return f"{target_dir}/{name}"


def resolve_target(name: str, target_dir: str) -> str:
    if not name:
        raise TargetNotExecutable("cannot resolve an empty command name")
    path = target_path(name, target_dir)
    if len(os.fsencode(path)) >= PATH_MAX:
        raise PathTooLong("command path is too long")
    if not os.path.isfile(path) or not os.access(path, os.X_OK):
        raise TargetNotExecutable(f"command '{path}' not found or not executable")
    return path


def build_argv(path: str, argv: Sequence[str]) -> tuple[str, ...]:
    return (path, *argv[1:])
