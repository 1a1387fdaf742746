"""Starting external programs from the panel."""

from __future__ import annotations

import shlex
import subprocess
from typing import Optional, Sequence

__all__ = ["RunError", "run_app", "run_app_argv"]


class RunError(RuntimeError):
    """Raised when a program cannot be started."""


def _spawn(argv: Sequence[str], **kwargs) -> subprocess.Popen:
    if not argv:
        raise RunError("Text was empty (or contained only whitespace)")
    try:
        return subprocess.Popen(list(argv), **kwargs)
    except OSError as exc:
        reason = exc.strerror or str(exc)
        raise RunError(f'Failed to execute child process "{argv[0]}" ({reason})') from exc


def run_app(cmd: Optional[str]) -> Optional[subprocess.Popen]:
    """Start the shell-quoted command line *cmd* without waiting for it."""
    if cmd is None:
        return None
    try:
        argv = shlex.split(cmd)
    except ValueError as exc:
        raise RunError(str(exc)) from exc
    return _spawn(argv)


def run_app_argv(argv: Sequence[str]) -> int:
    """Start *argv* with stdout discarded; return the child's pid.

    The caller is responsible for reaping the child.
    """
    return _spawn(argv, stdout=subprocess.DEVNULL).pid