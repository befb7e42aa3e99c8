"""Command construction for each qwr mode.

Commands are lists of argument tokens. They are only joined into a shell
string for display, see :func:`qwr.util.shell_join`.
"""

from __future__ import annotations

from loguru import logger

from . import runtime
from .config import (
    MODE_CREATE_DRIVE,
    MODE_INSTALL,
    MODE_RUN,
    MODE_SSH,
    LaunchConfig,
)
from .errors import UsageError, ValidationError

log = logger

# mode -> ordered (field, flag) pairs that must be present
REQUIRED_FIELDS = {
    MODE_CREATE_DRIVE: [('image', 'img'), ('size', 'sz')],
    MODE_INSTALL: [('iso', 'iso'), ('image', 'img'), ('size', 'sz')],
    MODE_RUN: [('image', 'img')],
    MODE_SSH: [('image', 'img')],
}


def require_fields(cfg: LaunchConfig, mode: str | None = None) -> None:
    """
    Raise :class:`ValidationError` for the first field ``mode`` needs that
    ``cfg`` lacks. ``mode`` defaults to ``cfg.mode``.
    """
    mode = cfg.mode if mode is None else mode
    if mode not in REQUIRED_FIELDS:
        raise UsageError(f'unknown mode {mode}')
    for field, flag in REQUIRED_FIELDS[mode]:
        if getattr(cfg, field) is None:
            raise ValidationError(f'`{mode}` requires --{flag}')


def disk_create_cmd(cfg: LaunchConfig) -> list[str]:
    return runtime.qemu_img_cmd(
        'create', '-f', runtime.DISK_FORMAT, cfg.image, f'{cfg.size}G'
    )


def secure_boot_args() -> list[str]:
    return [
        *runtime.pflash_drive(runtime.SECURE_BOOT_CODE, readonly=True),
        *runtime.pflash_drive(runtime.SECURE_BOOT_VARS),
        '-machine', 'q35,smm=on',
        '-global', 'driver=cfi.pflash01,property=secure,value=on',
    ]


def tpm_args() -> list[str]:
    chardev = runtime.TPM_CHARDEV_ID
    tpmdev = runtime.TPM_DEVICE_ID
    return [
        '-chardev', f'socket,id={chardev},path={runtime.TPM_SOCKET}',
        '-tpmdev', f'emulator,id={tpmdev},chardev={chardev}',
        '-device', f'tpm-tis,tpmdev={tpmdev}',
    ]


def firmware_args(cfg: LaunchConfig) -> list[str]:
    args: list[str] = []
    if cfg.use_secure_boot:
        args.extend(secure_boot_args())
    if cfg.use_tpm:
        args.extend(tpm_args())
    return args


def disk_args(cfg: LaunchConfig) -> list[str]:
    if cfg.mode == MODE_INSTALL:
        return ['-cdrom', cfg.iso, '-hda', cfg.image, '-boot', 'd']
    return ['-hda', cfg.image]


def network_args(cfg: LaunchConfig) -> list[str]:
    netdev = f'user,id={runtime.NETDEV_ID}'
    if cfg.mode == MODE_SSH:
        netdev += f',hostfwd=tcp::{cfg.ssh_port}-:{runtime.GUEST_SSH_PORT}'
    return [
        '-netdev', netdev,
        '-device', f'{runtime.NIC_MODEL},netdev={runtime.NETDEV_ID}',
    ]


def display_args(cfg: LaunchConfig) -> list[str]:
    if cfg.mode == MODE_SSH:
        return ['-nographic']
    return ['-vga', 'virtio', '-display', 'sdl']


def extra_disk_args(cfg: LaunchConfig) -> list[str]:
    if cfg.extra_disk is None:
        return []
    if cfg.mode not in (MODE_RUN, MODE_SSH):
        log.warning(
            'Ignoring --extra-disk={} in `{}` mode', cfg.extra_disk, cfg.mode
        )
        return []
    return ['-hdb', cfg.extra_disk]


def launch_segments(cfg: LaunchConfig) -> list[tuple[str, list[str]]]:
    """
    Return the launch command as named segments, in command-line order.

    The firmware segment must precede ``-cpu host`` for the pflash and SMM
    machine options to take effect. Empty segments are kept so callers can
    rely on the names being present.
    """
    return [
        ('base', runtime.qemu_system_cmd()),
        ('memory', ['-m', f'{cfg.memory}G']),
        ('smp', ['-smp', cfg.cores]),
        ('firmware', firmware_args(cfg)),
        ('cpu', ['-cpu', 'host']),
        ('disk', disk_args(cfg)),
        ('network', network_args(cfg)),
        ('display', display_args(cfg)),
        ('extra_disk', extra_disk_args(cfg)),
    ]


def launch_cmd(cfg: LaunchConfig) -> list[str]:
    cmd: list[str] = []
    for _, segment in launch_segments(cfg):
        cmd.extend(segment)
    return cmd


def build(cfg: LaunchConfig) -> list[list[str]]:
    """Build the commands for ``cfg.mode``, in the order they must run."""
    require_fields(cfg)
    if cfg.mode == MODE_CREATE_DRIVE:
        return [disk_create_cmd(cfg)]
    if cfg.mode == MODE_INSTALL:
        return [disk_create_cmd(cfg), launch_cmd(cfg)]
    return [launch_cmd(cfg)]
