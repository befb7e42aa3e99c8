"""Host preflight checks for the binaries and files a mode relies on."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from . import runtime
from .config import LAUNCH_MODES, MODE_CREATE_DRIVE, MODE_INSTALL, LaunchConfig
from .util import which

log = logger


def required_commands(cfg: LaunchConfig) -> list[str]:
    cmds = []
    if cfg.mode in (MODE_CREATE_DRIVE, MODE_INSTALL):
        cmds.append(runtime.QEMU_IMG)
    if cfg.mode in LAUNCH_MODES:
        cmds.append(runtime.QEMU_SYSTEM)
    if os.geteuid() != 0:
        cmds.append('sudo')
    return cmds


def check_commands(cfg: LaunchConfig) -> list[str]:
    return [c for c in required_commands(cfg) if which(c) is None]


def firmware_warning_lines(cfg: LaunchConfig) -> list[str]:
    if cfg.mode not in LAUNCH_MODES:
        return []
    warnings: list[str] = []
    if cfg.use_secure_boot:
        for path in (runtime.SECURE_BOOT_CODE, runtime.SECURE_BOOT_VARS):
            if not Path(path).exists():
                warnings.append(
                    f'Secure boot firmware not found: {path}. '
                    'Install your distribution\'s OVMF package.'
                )
    if cfg.use_tpm and not Path(runtime.TPM_SOCKET).exists():
        warnings.append(
            f'TPM emulator socket not found: {runtime.TPM_SOCKET}. '
            'Start swtpm before launching the VM.'
        )
    return warnings
