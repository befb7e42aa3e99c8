"""Fold argv tokens into a :class:`LaunchConfig`."""

from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from .args import LONG, SHORT, ArgToken
from .config import MODES, LaunchConfig
from .errors import HelpRequested, UsageError

# flag name -> (LaunchConfig field, value placeholder for error messages)
VALUE_FLAGS = {
    'mem': ('memory', '<amt>'),
    'cores': ('cores', '<amt>'),
    'img': ('image', '<img.qcow2>'),
    'extra-disk': ('extra_disk', '<img.qcow2>'),
    'iso': ('iso', '<file.iso>'),
    'sz': ('size', '<amt>'),
    'ssh-port': ('ssh_port', '<port>'),
}

# flag name -> LaunchConfig field; any attached value is ignored
SWITCH_FLAGS = {
    'tpm': 'use_tpm',
    'secure': 'use_secure_boot',
    'dry-run': 'dry_run',
}

HELP_SHORT = 'h'
HELP_LONG = 'help'
VERBOSE_LONG = 'verbose'


def interpret(tokens: Sequence[ArgToken]) -> LaunchConfig:
    """
    Build the launch configuration from tokens, left to right.

    The first offending token raises :class:`UsageError`. A help flag raises
    :class:`HelpRequested` as soon as it is reached, as does an empty token
    list. Per-mode required fields are not checked here.
    """
    if not tokens:
        raise HelpRequested()
    cfg = LaunchConfig()
    for tok in tokens:
        cfg = _apply(cfg, tok)
    if cfg.mode is None:
        raise UsageError('no mode specified')
    return cfg


def _apply(cfg: LaunchConfig, tok: ArgToken) -> LaunchConfig:
    if tok.kind == SHORT:
        if tok.name == HELP_SHORT:
            raise HelpRequested()
        raise UsageError(f'unknown flag -{tok.name}')
    if tok.kind == LONG:
        return _apply_long(cfg, tok)
    if tok.name not in MODES:
        raise UsageError(f'unknown argument {tok.name}')
    if cfg.mode is not None:
        raise UsageError(f'multiple modes specified: {cfg.mode}, {tok.name}')
    return replace(cfg, mode=tok.name)


def _apply_long(cfg: LaunchConfig, tok: ArgToken) -> LaunchConfig:
    if tok.name == HELP_LONG:
        raise HelpRequested()
    if tok.name in VALUE_FLAGS:
        field, placeholder = VALUE_FLAGS[tok.name]
        if tok.value is None:
            raise UsageError(
                f'option --{tok.name} requires `={placeholder}`'
            )
        return replace(cfg, **{field: tok.value})
    if tok.name in SWITCH_FLAGS:
        return replace(cfg, **{SWITCH_FLAGS[tok.name]: True})
    if tok.name == VERBOSE_LONG:
        return replace(cfg, verbose=cfg.verbose + 1)
    raise UsageError(f'unknown flag --{tok.name}')
