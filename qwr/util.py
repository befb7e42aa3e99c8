"""Shared utility helpers for subprocess execution and command formatting."""

from __future__ import annotations

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from loguru import logger

log = logger


@dataclass(frozen=True)
class CmdResult:
    code: int


class CmdError(RuntimeError):
    def __init__(self, cmd: Sequence[str] | str, result: CmdResult):
        self.cmd = cmd
        self.result = result
        super().__init__(f'Command failed (code={result.code}): {cmd}')


def shell_join(cmd: Sequence[str]) -> str:
    return ' '.join(shlex.quote(c) for c in cmd)


def run_cmd(
    cmd: Sequence[str],
    *,
    sudo: bool = False,
    check: bool = True,
) -> CmdResult:
    """
    Run ``cmd`` to completion with the caller's stdin, stdout and stderr.

    With ``sudo`` the command is prefixed with an interactive ``sudo`` unless
    already running as root.
    """
    original_cmd = cmd = list(cmd)
    if sudo and os.geteuid() != 0:
        cmd = ['sudo', *cmd]
        log.opt(depth=1).debug(
            'Running with sudo: {}', shell_join(original_cmd)
        )
    log.opt(depth=1).debug('RUN: {}', shell_join(cmd))
    p = subprocess.run(cmd)
    res = CmdResult(p.returncode)
    if check and p.returncode != 0:
        log.opt(depth=1).error(
            'Command failed code={} cmd={}', p.returncode, shell_join(cmd)
        )
        raise CmdError(shell_join(cmd), res)
    if p.returncode == 0:
        log.opt(depth=1).debug('Command ok code=0 cmd={}', shell_join(cmd))
    return res


def exit_status(code: int) -> int:
    """Map a child return code to a process exit status for a failed run."""
    if code < 0:
        # Killed by signal -code, reported the way shells do.
        return 128 - code
    return code or 1


def which(cmd: str) -> Optional[str]:
    from shutil import which as _which

    return _which(cmd)
