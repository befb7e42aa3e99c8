"""Top-level CLI wiring, exit codes, and logging setup."""

from __future__ import annotations

import os
import sys

from loguru import logger

from ..args import tokenize
from ..builder import build
from ..errors import HelpRequested, UsageError
from ..interpret import interpret
from ..launch import execute, preflight
from ..util import CmdError, exit_status
from .help import render_help

log = logger


def main(argv: list[str] | None = None) -> None:
    if argv is None:
        argv = sys.argv[1:]
    _setup_logging(0)
    try:
        cfg = interpret(tokenize(argv))
        _setup_logging(cfg.verbose)
        log.debug('Launch configuration: {}', cfg)
        commands = build(cfg)
    except HelpRequested:
        print(render_help())
        sys.exit(0)
    except UsageError as ex:
        print(f'[Error]: {ex}', file=sys.stderr)
        sys.exit(1)

    if not cfg.dry_run:
        preflight(cfg)
    try:
        execute(commands, dry_run=cfg.dry_run)
    except CmdError as ex:
        log.error('Stopping after failed command: {}', ex.cmd)
        sys.exit(exit_status(ex.result.code))
    sys.exit(0)


def _setup_logging(verbosity: int) -> None:
    logger.remove()
    level = 'WARNING'
    if verbosity == 1:
        level = 'INFO'
    elif verbosity >= 2:
        level = 'DEBUG'
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(
        sys.stderr,
        level=level,
        colorize=colorize,
        format='<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>',
    )
    log.debug(
        'Logging configured at {} (verbosity={}, colorize={})',
        level,
        verbosity,
        colorize,
    )
