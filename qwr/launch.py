"""Sequential execution of built commands, with dry-run and preflight."""

from __future__ import annotations

import sys
from typing import Sequence

import ubelt as ub
from loguru import logger

from .config import LaunchConfig
from .host import check_commands, firmware_warning_lines
from .resource_checks import resource_warning_lines
from .util import run_cmd, shell_join

log = logger


def preflight(cfg: LaunchConfig) -> list[str]:
    """Log and return advisory warnings. Never raises on what it finds."""
    warnings = [
        f'Required command not found on PATH: {c}' for c in check_commands(cfg)
    ]
    warnings.extend(firmware_warning_lines(cfg))
    warnings.extend(resource_warning_lines(cfg))
    for line in warnings:
        log.warning(line)
    return warnings


def show_command(cmd: Sequence[str]) -> None:
    text = shell_join(cmd)
    if sys.stdout.isatty():
        text = ub.highlight_code(text, lexer_name='bash')
    print(text)


def execute(commands: Sequence[Sequence[str]], *, dry_run: bool = False) -> None:
    """
    Run each command to completion before starting the next one.

    Commands run with inherited standard streams and elevated privileges.
    A failing command raises :class:`qwr.util.CmdError` and the remaining
    commands are not started.
    """
    for idx, cmd in enumerate(commands, start=1):
        if dry_run:
            log.info('DRYRUN: {}', shell_join(cmd))
            show_command(cmd)
            continue
        log.info('Running command {}/{}: {}', idx, len(commands), cmd[0])
        run_cmd(cmd, sudo=True, check=True)
